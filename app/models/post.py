"""Post model for blog entries."""

import uuid

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, Boolean, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Post(Base):
    """A blog post owned by one user."""

    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Foreign Keys
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )

    # Post Content
    title = Column(String(200), nullable=False)
    slug = Column(String(220), nullable=False, unique=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=True)
    is_published = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    published_at = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index("posts_created_idx", "created_at"),
        Index("posts_published_idx", "published_at"),
    )

    # Relationships
    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")
    likes = relationship(
        "Like",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.asc()",
    )
