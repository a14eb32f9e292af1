"""Family Service.

Family creation, membership roster and the read-only group view.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError
from app.core.policy import ensure_family_reader, ensure_self
from app.database import insert_ignore
from app.models.child import Child
from app.models.family import ROLE_ADMIN, Family, FamilyMember
from app.models.profile import Profile
from app.models.user import User
from app.schemas.child import ChildResponse
from app.schemas.family import FamilyResponse, GroupView, MemberResponse, SelectedMember
from app.schemas.measurement import MeasurementRecord
from app.schemas.profile import ProfileResponse
from app.services.profile_service import (
    ensure_profile,
    get_child_measurements,
    get_profile_measurement,
)

logger = logging.getLogger(__name__)


async def add_member(
    db: AsyncSession, family_id: uuid.UUID, profile_id: uuid.UUID, role: str,
) -> FamilyMember:
    """Insert a membership row unless one exists; return the stored row.

    An existing row keeps its original role.
    """
    await db.flush()
    await db.execute(
        insert_ignore(
            db,
            FamilyMember,
            {
                "id": uuid.uuid4(),
                "family_id": family_id,
                "profile_id": profile_id,
                "role": role,
                "created_at": datetime.now(timezone.utc),
            },
            ["family_id", "profile_id"],
        )
    )
    result = await db.execute(
        select(FamilyMember).where(
            FamilyMember.family_id == family_id,
            FamilyMember.profile_id == profile_id,
        )
    )
    return result.scalar_one()


async def create_family(
    db: AsyncSession, creator: User, name: str | None,
) -> tuple[Family, FamilyMember]:
    """Create a family with ``creator`` as its admin.

    Family row, the creator's ``family_id`` and the admin membership are
    written in the caller's unit of work and commit together.
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Family name is required.")

    profile = await ensure_profile(db, creator.id)
    ensure_self(creator, profile.id)

    family = Family(name=name)
    db.add(family)
    await db.flush()

    profile.family_id = family.id
    membership = await add_member(db, family.id, profile.id, ROLE_ADMIN)

    logger.info("Family %s created by %s", family.id, creator.id)
    return family, membership


async def list_members(db: AsyncSession, family_id: uuid.UUID) -> list[MemberResponse]:
    """Roster in join order, labelled with each member's display name."""
    result = await db.execute(
        select(FamilyMember, Profile)
        .join(Profile, Profile.id == FamilyMember.profile_id)
        .where(FamilyMember.family_id == family_id)
        .order_by(FamilyMember.created_at.asc())
    )
    return [
        MemberResponse(
            profile_id=member.profile_id,
            role=member.role,
            label=profile.label,
            created_at=member.created_at,
        )
        for member, profile in result.all()
    ]


async def list_children_with_measurements(
    db: AsyncSession, *conditions,
) -> list[ChildResponse]:
    """Children matching ``conditions`` ordered by birthdate, with measurements."""
    result = await db.execute(
        select(Child).where(*conditions).order_by(Child.birthdate.asc())
    )
    children = result.scalars().all()
    measurements = await get_child_measurements(db, (c.id for c in children))

    items = []
    for child in children:
        item = ChildResponse.model_validate(child)
        record = measurements.get(child.id)
        if record is not None:
            item.measurements = MeasurementRecord.model_validate(record)
            item.has_measurements = True
        items.append(item)
    return items


async def load_group_view(
    db: AsyncSession, viewer: Profile, member_id: uuid.UUID | None = None,
) -> GroupView:
    """Build the family page for ``viewer``.

    ``member_id`` selects whose details to show; anything that is not a
    current member of the viewer's family falls back to the viewer.
    """
    if viewer.family_id is None:
        return GroupView()

    family = await db.get(Family, viewer.family_id)
    if family is None:
        return GroupView()
    ensure_family_reader(viewer, family.id)

    members = await list_members(db, family.id)
    member_ids = {m.profile_id for m in members}
    selected_id = member_id if member_id in member_ids else viewer.id

    selected_profile = await db.get(Profile, selected_id)
    selected = None
    if selected_profile is not None:
        record = await get_profile_measurement(db, selected_id)
        selected = SelectedMember(
            profile=ProfileResponse.model_validate(selected_profile),
            measurements=(
                MeasurementRecord.model_validate(record) if record else MeasurementRecord()
            ),
            children=await list_children_with_measurements(
                db, Child.family_id == family.id, Child.created_by == selected_id,
            ),
        )

    return GroupView(
        family=FamilyResponse.model_validate(family),
        members=members,
        selected=selected,
    )
