"""Children router.

Children are owned by the account that added them. Other family members see
them read-only through the family group view.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_profile, get_current_user
from app.core.errors import NotFound, ValidationError
from app.core.policy import ensure_child_owner
from app.database import get_db
from app.models.child import Child
from app.models.profile import Profile
from app.models.user import User
from app.schemas.child import ChildCreate, ChildResponse
from app.schemas.measurement import MeasurementRecord, MeasurementValues
from app.services.family_service import list_children_with_measurements
from app.services.profile_service import upsert_child_measurement

router = APIRouter(prefix="/children", tags=["Children"])


@router.get("/", response_model=list[ChildResponse])
async def list_my_children(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile: Profile = Depends(get_current_profile),
):
    """List the children this account added, youngest birthdate last."""
    return await list_children_with_measurements(db, Child.created_by == profile.id)


@router.post("/", response_model=ChildResponse, status_code=status.HTTP_201_CREATED)
async def create_child(
    body: ChildCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    profile: Profile = Depends(get_current_profile),
):
    """Add a child, shared with the caller's current family if any."""
    name = body.name.strip()
    if not name or body.birthdate is None:
        raise ValidationError("Name and birthdate are required.")

    child = Child(
        name=name,
        birthdate=body.birthdate,
        created_by=profile.id,
        family_id=profile.family_id,
    )
    db.add(child)
    await db.commit()
    await db.refresh(child)
    return ChildResponse.model_validate(child)


@router.put("/{child_id}/measurements", response_model=MeasurementRecord)
async def upsert_child_measurements(
    child_id: uuid.UUID,
    body: MeasurementValues,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
):
    """Replace a child's measurement record. Only the child's creator may write."""
    child = await db.get(Child, child_id)
    if child is None:
        raise NotFound("Child not found")

    ensure_child_owner(current_user, child)
    record = await upsert_child_measurement(db, child.id, body)
    await db.commit()
    return record
