"""Pydantic schemas for Category."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""
    name: str = Field(..., min_length=1, max_length=50, description="Category name")
    description: Optional[str] = Field(None, description="Category description")


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class CategoryResponse(BaseModel):
    """Schema for Category response."""
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryPostSummary(BaseModel):
    id: UUID
    title: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CategoryDetailResponse(CategoryResponse):
    """Category with its visible posts."""
    posts: List[CategoryPostSummary] = []


class CategoryListResponse(BaseModel):
    """Response for listing categories."""
    categories: List[CategoryResponse]
