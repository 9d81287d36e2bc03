"""Custom exceptions for the Letspost API."""

from fastapi import HTTPException, status

from app.core.visibility import Access


class InvalidCredentialsException(HTTPException):
    """Exception when identifier or password is wrong."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountInactiveException(HTTPException):
    """Exception when the acting account is suspended or deleted."""

    def __init__(self, detail: str = "User account inactive"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundException(HTTPException):
    """Entity is absent, or hidden from the caller."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ForbiddenException(HTTPException):
    """Caller is authenticated but not allowed to do this."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class ConflictException(HTTPException):
    """
    Exception for uniqueness violations.

    Raised for a taken username or email, a duplicate category name,
    a second like on the same post, or a category still used by posts.

    Status Code: 409 Conflict
    """

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


def ensure_access(
    access: Access,
    *,
    not_found: str = "Not found",
    forbidden: str = "Forbidden",
) -> None:
    """Raise the HTTP exception matching a resolver outcome.

    Usage:
        >>> ensure_access(resolve_post_read(post, viewer), not_found="Post not found")
    """
    if access is Access.NOT_FOUND:
        raise NotFoundException(detail=not_found)
    if access is Access.FORBIDDEN:
        raise ForbiddenException(detail=forbidden)


__all__ = [
    "InvalidCredentialsException",
    "AccountInactiveException",
    "NotFoundException",
    "ForbiddenException",
    "ConflictException",
    "ensure_access",
]
