"""Invites router.

Preview and accept an invite token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.core.rate_limit import INVITE_LIMIT, limiter
from app.database import get_db
from app.models.user import User
from app.schemas.family import FamilyResponse, MemberResponse
from app.schemas.invite import InviteAccept, InviteAcceptedResponse, InvitePreview
from app.services.invite_service import accept_family_invite, preview_invite
from app.services.profile_service import ensure_profile

router = APIRouter(prefix="/invites", tags=["Invites"])


@router.post("/accept", response_model=InviteAcceptedResponse)
@limiter.limit(INVITE_LIMIT)
async def accept_invite(
    request: Request,
    body: InviteAccept,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
):
    """Join the family behind an invite token."""
    family, membership = await accept_family_invite(db, current_user, body.token)
    profile = await ensure_profile(db, current_user.id)
    await db.commit()
    return InviteAcceptedResponse(
        family=FamilyResponse.model_validate(family),
        membership=MemberResponse(
            profile_id=membership.profile_id,
            role=membership.role,
            label=profile.label,
            created_at=membership.created_at,
        ),
    )


@router.get("/{token}", response_model=InvitePreview)
@limiter.limit(INVITE_LIMIT)
async def get_invite_preview(
    request: Request,
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: User = Depends(get_current_user),
):
    """Show which family a token leads to and whether it is still valid."""
    return await preview_invite(db, token)
