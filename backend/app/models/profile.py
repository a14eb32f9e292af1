import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.measurement import MeasurementColumns


class Profile(Base):
    """Per-account profile; ``id`` is the account id."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), primary_key=True,
    )
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    family_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("families.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    @property
    def label(self) -> str:
        """Display name, falling back to the id when no name is set."""
        return (self.full_name or "").strip() or str(self.id)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, family_id={self.family_id})>"


class ProfileMeasurement(MeasurementColumns, Base):
    __tablename__ = "profile_measurements"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id"), unique=True, nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ProfileMeasurement(profile_id={self.profile_id})>"
