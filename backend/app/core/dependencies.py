import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotAuthenticated
from app.core.security import decode_token
from app.database import get_db

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Extract and validate the JWT from the Authorization header.

    Returns the User ORM instance for the authenticated account.

    Raises:
        NotAuthenticated: If the token is missing, invalid, or the account
            does not exist.
    """
    if not token:
        raise NotAuthenticated("Not authenticated")

    try:
        payload = decode_token(token)
        user_id: str | None = payload.get("sub")
        token_type: str | None = payload.get("type")
        if user_id is None or token_type != "access":
            raise NotAuthenticated()
    except JWTError:
        raise NotAuthenticated()

    # Import here to avoid circular imports (models -> database -> dependencies)
    from app.models.user import User

    try:
        account_id = uuid.UUID(user_id)
    except ValueError:
        raise NotAuthenticated()

    result = await db.execute(select(User).where(User.id == account_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise NotAuthenticated()

    return user


async def get_current_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user=Depends(get_current_user),
):
    """Resolve the caller's profile, creating it on first access."""
    from app.services.profile_service import ensure_profile

    return await ensure_profile(db, current_user.id)
