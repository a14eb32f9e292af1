import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.child import ChildResponse
from app.schemas.measurement import MeasurementRecord
from app.schemas.profile import ProfileResponse


class FamilyCreate(BaseModel):
    name: str = Field(default="", max_length=100)


class FamilyResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class MemberResponse(BaseModel):
    profile_id: uuid.UUID
    role: str  # admin | member
    label: str
    created_at: datetime | None = None


class SelectedMember(BaseModel):
    """Read-only details of one family member."""

    profile: ProfileResponse
    measurements: MeasurementRecord
    children: list[ChildResponse]


class GroupView(BaseModel):
    family: FamilyResponse | None = None
    members: list[MemberResponse] = []
    selected: SelectedMember | None = None
