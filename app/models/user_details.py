"""UserDetails model for public profile fields."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Boolean, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class UserDetails(Base):
    """Profile details, one row per user."""

    __tablename__ = "user_details"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        unique=True,
    )

    full_name = Column(String(100), nullable=True, index=True)
    bio = Column(Text, nullable=True)
    is_public = Column(Boolean, default=True)
    location = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)

    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="details")
