import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.child import ChildResponse
from app.schemas.measurement import MeasurementRecord


class ProfileUpdate(BaseModel):
    full_name: str | None = Field(default=None, max_length=200)


class ProfileResponse(BaseModel):
    id: uuid.UUID
    full_name: str | None = None
    family_id: uuid.UUID | None = None
    label: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ProfileView(BaseModel):
    """Self view: own profile, own measurements and own children."""

    email: str
    profile: ProfileResponse
    measurements: MeasurementRecord
    has_measurements: bool
    children: list[ChildResponse]
