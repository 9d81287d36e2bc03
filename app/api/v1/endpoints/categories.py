"""Category endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_role
from app.core.exceptions import ConflictException, NotFoundException, ensure_access
from app.core.visibility import resolve_category_mutation
from app.crud import crud_category, crud_post
from app.models.user import User, UserRole
from app.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryPostSummary,
    CategoryResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


def _require_admin(current_user: User = Depends(require_role(UserRole.ADMIN))) -> User:
    ensure_access(resolve_category_mutation(current_user), forbidden="Admin access required")
    return current_user


@router.get(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
def list_categories(db: Session = Depends(get_db)) -> CategoryListResponse:
    """All categories ordered by name."""
    categories = crud_category.get_all(db)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.get(
    "/{slug}",
    response_model=CategoryDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get category by slug",
    description="""
    A category with its published posts from active authors, newest first.

    **Access:** Public
    """,
)
def get_category(
    slug: str,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> CategoryDetailResponse:
    category = crud_category.get_by_slug(db, slug)
    if not category:
        raise NotFoundException(detail="Category not found")

    posts, _ = crud_post.get_visible(db, category_id=category.id, limit=limit)
    return CategoryDetailResponse(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        created_at=category.created_at,
        posts=[CategoryPostSummary.model_validate(p) for p in posts],
    )


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    description="""
    Create a category. The slug is derived from the name.

    **Access:** Admin only
    """,
)
def create_category(
    category_in: CategoryCreate,
    current_user: User = Depends(_require_admin),
    db: Session = Depends(get_db),
):
    if crud_category.get_by_name(db, category_in.name):
        raise ConflictException(detail="Category with this name already exists")

    category = crud_category.create_category(db, category_in=category_in)
    logger.info(f"Category created: id={category.id}, slug={category.slug}, admin={current_user.id}")
    return category


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Update category",
    description="""
    Rename or re-describe a category. Renaming regenerates the slug.

    **Access:** Admin only
    """,
)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    current_user: User = Depends(_require_admin),
    db: Session = Depends(get_db),
):
    category = crud_category.get(db, category_id)
    if not category:
        raise NotFoundException(detail="Category not found")

    if category_in.name and category_in.name != category.name:
        if crud_category.get_by_name(db, category_in.name):
            raise ConflictException(detail="Category with this name already exists")

    return crud_category.update_category(db, db_obj=category, category_in=category_in)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete category",
    description="""
    Delete a category that no post references.

    **Access:** Admin only
    """,
)
def delete_category(
    category_id: int,
    current_user: User = Depends(_require_admin),
    db: Session = Depends(get_db),
) -> dict:
    category = crud_category.get(db, category_id)
    if not category:
        raise NotFoundException(detail="Category not found")

    if crud_category.has_posts(db, category_id=category_id):
        raise ConflictException(detail="Cannot delete category that is used by posts")

    crud_category.remove(db, db_obj=category)
    logger.info(f"Category {category_id} deleted by admin {current_user.id}")
    return {"message": "Category deleted successfully"}
