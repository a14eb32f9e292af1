"""SQLAlchemy ORM models.

All models are imported here so that Alembic can discover them
via ``Base.metadata`` when generating migrations.
"""

from app.models.child import Child, ChildMeasurement  # noqa: F401
from app.models.family import Family, FamilyMember  # noqa: F401
from app.models.invite import FamilyInvite  # noqa: F401
from app.models.profile import Profile, ProfileMeasurement  # noqa: F401
from app.models.user import RefreshToken, User  # noqa: F401

__all__ = [
    "Child",
    "ChildMeasurement",
    "Family",
    "FamilyInvite",
    "FamilyMember",
    "Profile",
    "ProfileMeasurement",
    "RefreshToken",
    "User",
]
