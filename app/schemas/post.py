"""Pydantic schemas for Post."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.user import UserSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    title: str = Field(..., min_length=1, max_length=200, description="Post title")
    content: str = Field(..., min_length=1, description="Post content")
    excerpt: Optional[str] = Field(None, max_length=300, description="Short summary")
    is_published: bool = Field(True, description="Publish immediately")
    category_id: Optional[int] = Field(None, gt=0, description="Post category ID")


class PostUpdate(BaseModel):
    """Schema for updating a post."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=300)
    is_published: Optional[bool] = None
    category_id: Optional[int] = Field(None, gt=0, description="Post category ID")

    @field_validator("title", "content", "is_published")
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; null is not a value for these columns
        if v is None:
            raise ValueError("must not be null")
        return v


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: UUID
    user_id: UUID
    category_id: Optional[int] = None
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    is_published: bool
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None
    author: Optional[UserSummary] = None
    category_name: Optional[str] = None  # Populated from category relationship
    like_count: int = 0
    comment_count: int = 0
    is_liked: bool = False  # Populated based on current user

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    """Response for listing posts."""
    posts: List[PostResponse]
    total: int
    has_more: bool = Field(..., description="Whether there are more posts to load")
