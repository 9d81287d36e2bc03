"""
SQLAlchemy Models for Letspost
"""

from ..database import Base
from .user import User, UserRole, AccountStatus
from .user_details import UserDetails
from .category import Category
from .post import Post
from .comment import Comment
from .like import Like

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "AccountStatus",
    "UserDetails",
    "Category",
    "Post",
    "Comment",
    "Like",
]
