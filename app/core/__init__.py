"""Core module exports."""

from .security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
    ALGORITHM,
)
from .visibility import Access

__all__ = [
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
    "ALGORITHM",
    "Access",
]
