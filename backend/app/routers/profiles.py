"""Profiles router.

The caller's own profile view, name and measurements.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_profile, get_current_user
from app.core.policy import ensure_self
from app.database import get_db
from app.models.child import Child
from app.models.profile import Profile
from app.models.user import User
from app.schemas.measurement import MeasurementRecord, MeasurementValues
from app.schemas.profile import ProfileResponse, ProfileUpdate, ProfileView
from app.services.family_service import list_children_with_measurements
from app.services.profile_service import get_profile_measurement, upsert_profile_measurement

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileView)
async def get_my_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
):
    """Own profile with measurements and the children this account added."""
    record = await get_profile_measurement(db, profile.id)
    children = await list_children_with_measurements(db, Child.created_by == profile.id)
    return ProfileView(
        email=current_user.email,
        profile=ProfileResponse.model_validate(profile),
        measurements=MeasurementRecord.model_validate(record) if record else MeasurementRecord(),
        has_measurements=record is not None,
        children=children,
    )


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    body: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
):
    """Set the display name. A blank name clears it."""
    ensure_self(current_user, profile.id)
    profile.full_name = (body.full_name or "").strip() or None
    await db.commit()
    await db.refresh(profile)
    return profile


@router.put("/me/measurements", response_model=MeasurementRecord)
async def upsert_my_measurements(
    body: MeasurementValues,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
    profile: Profile = Depends(get_current_profile),
):
    """Replace the caller's measurement record."""
    ensure_self(current_user, profile.id)
    record = await upsert_profile_measurement(db, profile.id, body)
    await db.commit()
    return record
