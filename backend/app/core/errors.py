"""Domain errors raised by services and routers.

Each error is an ``HTTPException`` carrying a stable machine-readable
``code`` next to the human-readable ``detail``. The application renders
both as ``{"detail": ..., "code": ...}``.
"""

from fastapi import HTTPException, status


class FamfitError(HTTPException):
    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(FamfitError):
    code = "validation_error"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid input"


class NotAuthenticated(FamfitError):
    code = "not_authenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    def __init__(self, detail: str | None = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class PermissionDenied(FamfitError):
    code = "permission_denied"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not allowed to modify this record"


class NotFound(FamfitError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class NotInFamily(FamfitError):
    code = "not_in_family"
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You must be in a family to create an invite."


class InvalidToken(FamfitError):
    code = "invalid_token"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Invite token is invalid."


class TokenExpired(FamfitError):
    code = "token_expired"
    status_code = status.HTTP_410_GONE
    default_detail = "Invite token has expired."


class StoreError(FamfitError):
    code = "store_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Database request failed"
