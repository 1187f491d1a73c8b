"""Error kinds raised by services and the authorization guard.

Each kind is an HTTPException, so FastAPI renders it as ``{"detail": ...}``
with the matching status code wherever it is raised.
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Lookup target is absent."""

    def __init__(self, detail: Any = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """Failed credential or token check."""

    def __init__(self, detail: Any = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Identity is known but not allowed in, e.g. a deactivated account."""

    def __init__(self, detail: Any = "User account is inactive"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    """Uniqueness violation."""

    def __init__(self, detail: Any = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """Malformed input, either caught by validation or rejected by the store."""

    def __init__(self, detail: Any = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
