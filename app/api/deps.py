"""Request-scoped dependencies: database session, caller identity, role gates."""

import logging
from typing import Callable, Generator, Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.core.exceptions import AccountInactiveException
from app.core.security import create_access_token, decode_token
from app.crud import crud_user
from app.crud.post import parse_uuid
from app.database import SessionLocal
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

# auto_error is off so the cookie and ?token= fallbacks get a chance
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed when the response is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    """Access token from the Authorization header, then the cookie, then ?token=."""
    return bearer or request.cookies.get(TOKEN_COOKIE) or request.query_params.get("token")


def _resolve_user(db: Session, token: str, settings: Settings) -> Optional[User]:
    payload = decode_token(token, settings)
    user_id = parse_uuid(payload.get("sub"))
    if user_id is None:
        logger.warning("[AUTH] Token has no usable subject")
        return None
    return crud_user.get(db, user_id)


def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    The user the token belongs to, whatever their account status.

    Raises:
        HTTPException: 401 when the token is missing, does not verify,
            or names a user that does not exist
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise unauthorized

    try:
        user = _resolve_user(db, token, settings)
    except HTTPException:
        logger.warning("[AUTH] Token decode failed")
        raise unauthorized

    if user is None:
        raise unauthorized

    logger.debug(f"[AUTH] User authenticated: id={user.id}, role={user.role.value}")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Same as get_current_user, but the account must be active.

    Raises:
        HTTPException: 403 for suspended or deleted accounts
    """
    if not current_user.is_active:
        raise AccountInactiveException()
    return current_user


def get_optional_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """
    The active caller, or None for anonymous requests.

    A bad token or an inactive account is treated as anonymous instead of
    failing, so public pages keep working.
    """
    if not token:
        return None

    try:
        user = _resolve_user(db, token, settings)
    except HTTPException:
        return None

    if user is None or not user.is_active:
        return None
    return user


def require_role(*allowed_roles: UserRole) -> Callable:
    """
    Build a dependency that lets only the given roles through.

    Example:
        @router.post("/categories")
        def create_category(current_user: User = Depends(require_role(UserRole.ADMIN))):
            ...

    Raises:
        HTTPException: 403 when the caller's role is not allowed
    """
    def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions. Required role(s): {', '.join(r.value for r in allowed_roles)}",
            )
        return current_user

    return role_checker


def issue_token(response: Response, user: User, settings: Settings) -> str:
    """Create an access token for ``user`` and set it as an httpOnly cookie."""
    token = create_access_token({"sub": str(user.id), "email": user.email}, settings)
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return token


def clear_token(response: Response) -> None:
    response.delete_cookie(key=TOKEN_COOKIE)


__all__ = [
    "oauth2_scheme",
    "TOKEN_COOKIE",
    "issue_token",
    "clear_token",
    "get_db",
    "get_token",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
    "require_role",
]
