"""CRUD operations for Post."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import select, func, desc
from sqlalchemy.orm import Session

from app.core.visibility import visible_posts_clause
from app.crud.base import CRUDBase
from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.models.user import User
from app.schemas.post import PostCreate, PostUpdate

SLUG_FALLBACK = "post"
SLUG_MAX_LENGTH = 220


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it is not one."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Post]:
        stmt = select(Post).where(Post.slug == slug).limit(1)
        return db.scalars(stmt).first()

    def get_by_identifier(self, db: Session, *, identifier: str) -> Optional[Post]:
        """Get post by UUID or, failing that, by slug."""
        post_id = parse_uuid(identifier)
        if post_id is not None:
            post = self.get(db, post_id)
            if post is not None:
                return post
        return self.get_by_slug(db, slug=identifier)

    def create_post(self, db: Session, *, author: User, post_in: PostCreate) -> Post:
        """Create a new post with a unique slug."""
        slug = self.generate_unique_slug(
            db, post_in.title, fallback=SLUG_FALLBACK, max_length=SLUG_MAX_LENGTH
        )
        post = Post(
            user_id=author.id,
            category_id=post_in.category_id,
            title=post_in.title,
            slug=slug,
            content=post_in.content,
            excerpt=post_in.excerpt,
            is_published=post_in.is_published,
            published_at=datetime.now(timezone.utc) if post_in.is_published else None,
        )
        return self.save(db, post)

    def update_post(self, db: Session, *, db_obj: Post, post_in: PostUpdate) -> Post:
        """Apply a partial update.

        A new title regenerates the slug. Publishing keeps the first
        publish time; unpublishing clears it.
        """
        update_data = post_in.model_dump(exclude_unset=True)

        if update_data.get("title"):
            update_data["slug"] = self.generate_unique_slug(
                db,
                update_data["title"],
                fallback=SLUG_FALLBACK,
                max_length=SLUG_MAX_LENGTH,
                exclude_id=db_obj.id,
            )

        if update_data.get("is_published") is not None:
            if update_data["is_published"]:
                update_data["published_at"] = db_obj.published_at or datetime.now(timezone.utc)
            else:
                update_data["published_at"] = None

        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def get_visible(
        self,
        db: Session,
        *,
        viewer: Optional[User] = None,
        include_drafts: bool = False,
        category_id: Optional[int] = None,
        user_id: Optional[uuid.UUID] = None,
        username: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Post], int]:
        """List posts ``viewer`` may see, newest first, with the total count."""
        stmt = (
            select(Post)
            .join(User, Post.user_id == User.id)
            .where(visible_posts_clause(viewer, include_drafts=include_drafts))
        )
        if category_id is not None:
            stmt = stmt.where(Post.category_id == category_id)
        if user_id is not None:
            stmt = stmt.where(Post.user_id == user_id)
        if username is not None:
            stmt = stmt.where(User.username == username)

        total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0

        stmt = (
            stmt.order_by(desc(func.coalesce(Post.published_at, Post.created_at)))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all()), total

    def count_likes(self, db: Session, *, post_id: uuid.UUID) -> int:
        """Count likes left by active users."""
        stmt = (
            select(func.count())
            .select_from(Like)
            .join(User, Like.user_id == User.id)
            .where(Like.post_id == post_id, User.is_active)
        )
        return db.scalar(stmt) or 0

    def count_comments(self, db: Session, *, post_id: uuid.UUID) -> int:
        """Count comments left by active users."""
        stmt = (
            select(func.count())
            .select_from(Comment)
            .join(User, Comment.user_id == User.id)
            .where(Comment.post_id == post_id, User.is_active)
        )
        return db.scalar(stmt) or 0

    def check_user_liked(self, db: Session, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Check if user has liked a post."""
        return db.get(Like, (user_id, post_id)) is not None


# Singleton instance
crud_post = CRUDPost(Post)
