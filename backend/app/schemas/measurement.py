import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.measurement import MEASUREMENT_FIELD_NAMES


class MeasurementValues(BaseModel):
    """The seven optional measurements.

    Used both as the upsert payload, where every omitted field is written as
    null, and as the read model, where a missing record reads as all nulls.
    """

    height_cm: float | None = None
    weight_kg: float | None = None
    chest_cm: float | None = None
    waist_cm: float | None = None
    hips_cm: float | None = None
    inseam_cm: float | None = None
    shoe_size: float | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator(*MEASUREMENT_FIELD_NAMES, mode="before")
    @classmethod
    def _blank_is_null(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        return value

    @field_validator(*MEASUREMENT_FIELD_NAMES, mode="after")
    @classmethod
    def _finite_or_null(cls, value: float | None) -> float | None:
        if value is not None and not math.isfinite(value):
            return None
        return value


class MeasurementRecord(MeasurementValues):
    updated_at: datetime | None = None
