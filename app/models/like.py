"""Like model for post likes."""

from sqlalchemy import Column, TIMESTAMP, ForeignKey, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Like(Base):
    """One like per (user, post) pair."""

    __tablename__ = "likes"

    # Composite primary key
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    post_id = Column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )

    # Timestamps
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("likes_post_id_idx", "post_id"),
        Index("likes_created_idx", "created_at"),
    )

    # Relationships
    post = relationship("Post", back_populates="likes")
    user = relationship("User", back_populates="likes")
