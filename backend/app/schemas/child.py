import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.measurement import MeasurementRecord


class ChildCreate(BaseModel):
    name: str = Field(default="", max_length=100)
    birthdate: date | None = None


class ChildResponse(BaseModel):
    id: uuid.UUID
    name: str
    birthdate: date
    created_by: uuid.UUID
    family_id: uuid.UUID | None = None
    created_at: datetime | None = None
    measurements: MeasurementRecord = MeasurementRecord()
    has_measurements: bool = False
    model_config = ConfigDict(from_attributes=True)
