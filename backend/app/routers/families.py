"""Families router.

Create a family, view the family group and issue invites.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.dependencies import get_current_profile, get_current_user
from app.database import get_db
from app.models.profile import Profile
from app.models.user import User
from app.schemas.family import FamilyCreate, FamilyResponse, GroupView
from app.schemas.invite import InviteCreatedResponse, InviteResponse
from app.services.family_service import create_family, load_group_view
from app.services.invite_service import build_invite_url, issue_invite, list_active_invites

router = APIRouter(prefix="/families", tags=["Families"])


def _public_origin(request: Request) -> str | None:
    """Origin for shareable links, honouring a TLS-terminating proxy."""
    if settings.PUBLIC_APP_URL:
        return settings.PUBLIC_APP_URL
    host = request.headers.get("x-forwarded-host") or request.headers.get("host")
    if not host:
        return None
    proto = request.headers.get("x-forwarded-proto") or "http"
    return f"{proto}://{host}"


@router.post("/", response_model=FamilyResponse, status_code=status.HTTP_201_CREATED)
async def create_family_group(
    body: FamilyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
):
    """Create a family with the caller as admin."""
    family, _ = await create_family(db, current_user, body.name)
    await db.commit()
    await db.refresh(family)
    return family


@router.get("/me", response_model=GroupView)
async def get_my_family(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile: Profile = Depends(get_current_profile),
    member: uuid.UUID | None = None,
):
    """Family group view; ``member`` picks whose read-only details to show."""
    return await load_group_view(db, profile, member)


# ---------------------------------------------------------------------------
# Invites
# ---------------------------------------------------------------------------

@router.post(
    "/me/invites",
    response_model=InviteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
):
    """Issue a 7-day invite link for the caller's family."""
    invite = await issue_invite(db, current_user)
    await db.commit()
    return InviteCreatedResponse(
        **InviteResponse.model_validate(invite).model_dump(),
        invite_url=build_invite_url(_public_origin(request), invite.token),
    )


@router.get("/me/invites", response_model=list[InviteResponse])
async def list_invites(
    db: Annotated[AsyncSession, Depends(get_db)],
    profile: Profile = Depends(get_current_profile),
):
    """List unexpired invites for the caller's family."""
    return await list_active_invites(db, profile)
