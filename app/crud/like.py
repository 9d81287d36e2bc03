"""CRUD operations for Like."""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session, aliased

from app.crud.base import CRUDBase
from app.models.like import Like
from app.models.post import Post
from app.models.user import User


class CRUDLike(CRUDBase[Like, dict, dict]):
    """CRUD operations for Like."""

    def get_like(
        self,
        db: Session,
        *,
        post_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Optional[Like]:
        """Get like record if exists."""
        return db.get(Like, (user_id, post_id))

    def like(self, db: Session, *, post_id: uuid.UUID, user_id: uuid.UUID) -> Like:
        """Insert a like. A duplicate pair raises IntegrityError from the store."""
        return self.save(db, Like(post_id=post_id, user_id=user_id))

    def unlike(self, db: Session, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Remove a like. Returns whether one existed."""
        existing = self.get_like(db, post_id=post_id, user_id=user_id)
        if existing is None:
            return False
        self.remove(db, db_obj=existing)
        return True

    def get_by_post(self, db: Session, *, post_id: uuid.UUID) -> List[Like]:
        """Likes on a post from active users, oldest first."""
        stmt = (
            select(Like)
            .join(User, Like.user_id == User.id)
            .where(Like.post_id == post_id, User.is_active)
            .order_by(Like.created_at.asc())
        )
        return list(db.scalars(stmt).all())

    def get_by_user(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Like], int]:
        """Likes by a user on published posts of active authors."""
        post_author = aliased(User)
        stmt = (
            select(Like)
            .join(Post, Like.post_id == Post.id)
            .join(post_author, Post.user_id == post_author.id)
            .where(
                Like.user_id == user_id,
                Post.is_published.is_(True),
                post_author.is_active,
            )
        )
        total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        stmt = stmt.order_by(Like.created_at.asc()).offset(skip).limit(limit)
        return list(db.scalars(stmt).all()), total


# Singleton instance
crud_like = CRUDLike(Like)
