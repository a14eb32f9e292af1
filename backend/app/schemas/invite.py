import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.family import FamilyResponse, MemberResponse


class InviteResponse(BaseModel):
    id: uuid.UUID
    family_id: uuid.UUID
    invited_by: uuid.UUID
    token: str
    expires_at: datetime
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class InviteCreatedResponse(InviteResponse):
    invite_url: str


class InvitePreview(BaseModel):
    family_name: str
    invited_by: str
    expires_at: datetime
    expired: bool


class InviteAccept(BaseModel):
    token: str = ""


class InviteAcceptedResponse(BaseModel):
    family: FamilyResponse
    membership: MemberResponse
