"""Profile Service.

Idempotent profile creation and full-replace measurement upserts for
profiles and children.
"""

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import insert_ignore
from app.models.child import ChildMeasurement
from app.models.measurement import MEASUREMENT_FIELD_NAMES, MeasurementColumns
from app.models.profile import Profile, ProfileMeasurement
from app.schemas.measurement import MeasurementValues


async def ensure_profile(
    db: AsyncSession, account_id: uuid.UUID, full_name: str | None = None,
) -> Profile:
    """Return the account's profile, inserting it if it does not exist yet.

    Safe to call concurrently: the insert is a no-op when the row exists.
    ``full_name`` is only applied to a newly created profile.
    """
    await db.flush()
    await db.execute(
        insert_ignore(
            db, Profile, {"id": account_id, "full_name": full_name}, ["id"],
        )
    )
    result = await db.execute(select(Profile).where(Profile.id == account_id))
    return result.scalar_one()


async def get_profile_measurement(
    db: AsyncSession, profile_id: uuid.UUID,
) -> ProfileMeasurement | None:
    result = await db.execute(
        select(ProfileMeasurement).where(ProfileMeasurement.profile_id == profile_id)
    )
    return result.scalar_one_or_none()


async def get_child_measurements(
    db: AsyncSession, child_ids: Iterable[uuid.UUID],
) -> dict[uuid.UUID, ChildMeasurement]:
    """Map child id to its measurement record for the given children."""
    child_ids = list(child_ids)
    if not child_ids:
        return {}
    result = await db.execute(
        select(ChildMeasurement).where(ChildMeasurement.child_id.in_(child_ids))
    )
    return {m.child_id: m for m in result.scalars().all()}


async def _replace_measurements(
    db: AsyncSession,
    model: type[MeasurementColumns],
    owner_field: str,
    owner_id: uuid.UUID,
    values: MeasurementValues,
) -> MeasurementColumns:
    owner_column = getattr(model, owner_field)
    result = await db.execute(select(model).where(owner_column == owner_id))
    record = result.scalar_one_or_none()
    if record is None:
        record = model(**{owner_field: owner_id})
        db.add(record)

    # Full replace: fields missing from the payload are written as null
    data = values.model_dump()
    for name in MEASUREMENT_FIELD_NAMES:
        setattr(record, name, data[name])
    record.updated_at = datetime.now(timezone.utc)

    await db.flush()
    await db.refresh(record)
    return record


async def upsert_profile_measurement(
    db: AsyncSession, profile_id: uuid.UUID, values: MeasurementValues,
) -> ProfileMeasurement:
    return await _replace_measurements(
        db, ProfileMeasurement, "profile_id", profile_id, values,
    )


async def upsert_child_measurement(
    db: AsyncSession, child_id: uuid.UUID, values: MeasurementValues,
) -> ChildMeasurement:
    return await _replace_measurements(
        db, ChildMeasurement, "child_id", child_id, values,
    )
