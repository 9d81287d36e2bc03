"""Password hashing and access-token helpers.

Every function takes the settings object explicitly; nothing here reads
the environment.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import Settings


# New hashes use PBKDF2; bcrypt hashes still verify
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password[:MAX_PASSWORD_BYTES])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Unknown hash formats never match."""
    try:
        return pwd_context.verify(plain_password[:MAX_PASSWORD_BYTES], hashed_password)
    except ValueError:
        return False


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a JWT carrying ``data`` plus an ``exp`` claim.

    Args:
        data: Claims to embed, at least ``{"sub": "<user id>"}``
        settings: Holds SECRET_KEY and the default lifetime
        expires_delta: Lifetime override; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        The encoded token
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature and expiry, returning the claims.

    Raises:
        HTTPException: 401 for a malformed, forged or expired token
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
