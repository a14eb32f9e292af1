"""Invite Service.

Issue and redeem family invite tokens.

An invite is an opaque URL-safe token valid for seven days after issue.
Redemption is lazy about expiry: there is no sweep, an expired token simply
stops being accepted. A token is not consumed by redemption; any number of
accounts may join with it until it expires.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidToken, NotInFamily, TokenExpired, ValidationError
from app.core.policy import ensure_self
from app.models.family import ROLE_MEMBER, Family, FamilyMember
from app.models.invite import FamilyInvite
from app.models.profile import Profile
from app.models.user import User
from app.schemas.invite import InvitePreview
from app.services.family_service import add_member
from app.services.profile_service import ensure_profile

logger = logging.getLogger(__name__)

INVITE_TTL = timedelta(days=7)
TOKEN_BYTES = 24  # 192 bits of entropy


def generate_invite_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def build_invite_url(origin: str | None, token: str) -> str:
    """Shareable link to the accept-invite page; a bare path without origin."""
    path = f"/accept-invite?token={quote(token, safe='')}"
    if not origin:
        return path
    return origin.rstrip("/") + path


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(invite: FamilyInvite, now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return now > _as_utc(invite.expires_at)


async def issue_invite(
    db: AsyncSession, actor: User, now: datetime | None = None,
) -> FamilyInvite:
    """Create a new invite for the actor's current family."""
    profile = await ensure_profile(db, actor.id)
    ensure_self(actor, profile.id)
    if profile.family_id is None:
        raise NotInFamily()

    now = now or datetime.now(timezone.utc)
    invite = FamilyInvite(
        family_id=profile.family_id,
        invited_by=profile.id,
        token=generate_invite_token(),
        created_at=now,
        expires_at=now + INVITE_TTL,
    )
    db.add(invite)
    await db.flush()

    logger.info("Invite %s issued for family %s", invite.id, invite.family_id)
    return invite


async def list_active_invites(
    db: AsyncSession, profile: Profile, now: datetime | None = None,
) -> list[FamilyInvite]:
    """Unexpired invites of the profile's family, newest first."""
    if profile.family_id is None:
        raise NotInFamily("You are not in a family.")

    now = now or datetime.now(timezone.utc)
    result = await db.execute(
        select(FamilyInvite)
        .where(
            FamilyInvite.family_id == profile.family_id,
            FamilyInvite.expires_at >= now,
        )
        .order_by(FamilyInvite.created_at.desc())
    )
    return list(result.scalars().all())


async def get_invite(db: AsyncSession, token: str) -> FamilyInvite:
    token = (token or "").strip()
    if not token:
        raise ValidationError("Invite token is required.")

    result = await db.execute(select(FamilyInvite).where(FamilyInvite.token == token))
    invite = result.scalar_one_or_none()
    if invite is None:
        logger.warning("Unknown invite token presented")
        raise InvalidToken()
    return invite


async def preview_invite(
    db: AsyncSession, token: str, now: datetime | None = None,
) -> InvitePreview:
    invite = await get_invite(db, token)
    family = await db.get(Family, invite.family_id)
    inviter = await db.get(Profile, invite.invited_by)
    return InvitePreview(
        family_name=family.name if family else "",
        invited_by=inviter.label if inviter else str(invite.invited_by),
        expires_at=_as_utc(invite.expires_at),
        expired=is_expired(invite, now),
    )


async def accept_family_invite(
    db: AsyncSession, actor: User, token: str, now: datetime | None = None,
) -> tuple[Family, FamilyMember]:
    """Join the invite's family.

    Token lookup and expiry are checked before anything is written. The
    profile upsert, ``family_id`` switch and membership insert then run in
    that order inside the caller's unit of work. Redeeming again is a no-op
    and never changes an existing member's role.
    """
    invite = await get_invite(db, token)
    if is_expired(invite, now):
        logger.warning("Expired invite %s presented by %s", invite.id, actor.id)
        raise TokenExpired()

    family = await db.get(Family, invite.family_id)
    if family is None:
        raise InvalidToken()

    profile = await ensure_profile(db, actor.id)
    ensure_self(actor, profile.id)

    profile.family_id = family.id
    membership = await add_member(db, family.id, profile.id, ROLE_MEMBER)

    logger.info("Invite %s redeemed by %s", invite.id, actor.id)
    return family, membership
