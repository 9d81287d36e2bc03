"""CRUD operations for Comment."""

import uuid
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session, aliased

from app.crud.base import CRUDBase
from app.models.comment import Comment
from app.models.post import Post
from app.models.user import User


class CRUDComment(CRUDBase[Comment, dict, dict]):
    """CRUD operations for Comment."""

    def create_comment(
        self,
        db: Session,
        *,
        post_id: uuid.UUID,
        user_id: uuid.UUID,
        content: str,
    ) -> Comment:
        """Create a new comment on a post."""
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        return self.save(db, comment)

    def get_by_post(
        self,
        db: Session,
        *,
        post_id: uuid.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Comment], int]:
        """Comments on a post from active users, oldest first."""
        stmt = (
            select(Comment)
            .join(User, Comment.user_id == User.id)
            .where(Comment.post_id == post_id, User.is_active)
        )
        total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        stmt = stmt.order_by(Comment.created_at.asc(), Comment.id.asc()).offset(skip).limit(limit)
        return list(db.scalars(stmt).all()), total

    def get_by_user(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Comment], int]:
        """Comments written by a user on published posts of active authors."""
        post_author = aliased(User)
        stmt = (
            select(Comment)
            .join(Post, Comment.post_id == Post.id)
            .join(post_author, Post.user_id == post_author.id)
            .where(
                Comment.user_id == user_id,
                Post.is_published.is_(True),
                post_author.is_active,
            )
        )
        total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        stmt = stmt.order_by(Comment.created_at.asc(), Comment.id.asc()).offset(skip).limit(limit)
        return list(db.scalars(stmt).all()), total

    def update_content(self, db: Session, *, db_obj: Comment, content: str) -> Comment:
        return self.update(db, db_obj=db_obj, obj_in={"content": content})


# Singleton instance
crud_comment = CRUDComment(Comment)
