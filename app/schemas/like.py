"""Pydantic schemas for Like."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.schemas.user import UserSummary


class LikeCreate(BaseModel):
    """Schema for liking a post."""
    post_id: UUID


class LikePostSummary(BaseModel):
    id: UUID
    title: str
    slug: str
    is_published: bool

    model_config = ConfigDict(from_attributes=True)


class LikeResponse(BaseModel):
    user_id: UUID
    post_id: UUID
    created_at: datetime
    user: Optional[UserSummary] = None
    post: Optional[LikePostSummary] = None

    model_config = ConfigDict(from_attributes=True)


class LikeListResponse(BaseModel):
    likes: List[LikeResponse]
    total: int


class LikeStatusResponse(BaseModel):
    """Whether the current user liked a post."""
    post_id: UUID
    liked: bool


class LikeCountResponse(BaseModel):
    post_id: UUID
    count: int
