"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserSummary


class CommentCreate(BaseModel):
    """Schema for creating a comment."""
    post_id: UUID
    content: str = Field(..., min_length=1, description="Comment content")


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="Comment content")


class CommentPostSummary(BaseModel):
    id: UUID
    title: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Schema for Comment response."""
    id: int
    post_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    post: Optional[CommentPostSummary] = None

    model_config = ConfigDict(from_attributes=True)


class CommentListResponse(BaseModel):
    """Response for listing comments."""
    comments: List[CommentResponse]
    total: int
