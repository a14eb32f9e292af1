"""Row-ownership checks.

Every mutating operation calls one of these before it writes. A failed check
raises ``PermissionDenied`` and the request's unit of work is rolled back.
"""

import uuid

from app.core.errors import PermissionDenied
from app.models.child import Child
from app.models.profile import Profile
from app.models.user import User


def ensure_self(actor: User, profile_id: uuid.UUID) -> None:
    """An account may only write its own profile and profile measurements."""
    if actor.id != profile_id:
        raise PermissionDenied("You can only modify your own profile")


def ensure_child_owner(actor: User, child: Child) -> None:
    """Children are owned exclusively by the account that created them."""
    if child.created_by != actor.id:
        raise PermissionDenied("You can only modify children you added")


def ensure_family_reader(viewer: Profile, family_id: uuid.UUID | None) -> None:
    """Shared family data is only readable by the family's current members."""
    if family_id is None or viewer.family_id != family_id:
        raise PermissionDenied("You are not a member of this family")
