"""Post endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_active_user, get_db, get_optional_current_user
from app.core.exceptions import NotFoundException, ensure_access
from app.core.visibility import resolve_post_mutation, resolve_post_read
from app.crud import crud_category, crud_post
from app.models.post import Post
from app.models.user import User
from app.schemas.post import PostCreate, PostListResponse, PostResponse, PostUpdate
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


def _enrich_post_response(
    db: Session,
    post: Post,
    viewer: Optional[User] = None,
) -> PostResponse:
    """Add author, category, counters and like status to a post."""
    is_liked = False
    if viewer is not None:
        is_liked = crud_post.check_user_liked(db, post_id=post.id, user_id=viewer.id)

    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        category_id=post.category_id,
        title=post.title,
        slug=post.slug,
        content=post.content,
        excerpt=post.excerpt,
        is_published=post.is_published,
        created_at=post.created_at,
        updated_at=post.updated_at,
        published_at=post.published_at,
        author=UserSummary.model_validate(post.author) if post.author else None,
        category_name=post.category.name if post.category else None,
        like_count=crud_post.count_likes(db, post_id=post.id),
        comment_count=crud_post.count_comments(db, post_id=post.id),
        is_liked=is_liked,
    )


def _ensure_category_exists(db: Session, category_id: Optional[int]) -> None:
    if category_id is not None and crud_category.get(db, category_id) is None:
        raise NotFoundException(detail="Category not found")


@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List posts",
    description="""
    List posts visible to the caller, newest first.

    Only published posts from active authors are listed. With
    `include_drafts=true` an authenticated caller also sees their own
    drafts, and an admin sees every draft.

    **Access:** Public
    """,
)
def list_posts(
    category_id: Optional[int] = Query(None, gt=0, description="Filter by category"),
    user_id: Optional[UUID] = Query(None, description="Filter by author"),
    include_drafts: bool = Query(False, description="Include drafts the caller may see"),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of posts to return"),
    offset: int = Query(0, ge=0, description="Number of posts to skip"),
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    posts, total = crud_post.get_visible(
        db,
        viewer=viewer,
        include_drafts=include_drafts,
        category_id=category_id,
        user_id=user_id,
        skip=offset,
        limit=limit,
    )
    return PostListResponse(
        posts=[_enrich_post_response(db, post, viewer) for post in posts],
        total=total,
        has_more=(offset + len(posts) < total),
    )


@router.get(
    "/user",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List posts of one author",
    description="""
    List posts of one author, given by `user_id` or `username`.

    The author, and admins, see the drafts too.

    **Access:** Public
    """,
)
def list_user_posts(
    user_id: Optional[UUID] = Query(None),
    username: Optional[str] = Query(None, min_length=1),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    if user_id is None and username is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either user_id or username must be provided",
        )

    posts, total = crud_post.get_visible(
        db,
        viewer=viewer,
        include_drafts=True,
        user_id=user_id,
        username=username,
        skip=offset,
        limit=limit,
    )
    return PostListResponse(
        posts=[_enrich_post_response(db, post, viewer) for post in posts],
        total=total,
        has_more=(offset + len(posts) < total),
    )


@router.get(
    "/{identifier}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post by id or slug",
    description="""
    Get one post by its UUID or its slug.

    Drafts are visible only to their owner and to admins. Posts whose
    author is suspended or deleted are not found.

    **Access:** Public
    """,
)
def get_post(
    identifier: str,
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = crud_post.get_by_identifier(db, identifier=identifier)
    ensure_access(resolve_post_read(post, viewer), not_found="Post not found")
    return _enrich_post_response(db, post, viewer)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
    description="""
    Create a post. The slug is derived from the title and made unique.

    **Access:** Active users
    """,
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    _ensure_category_exists(db, post_in.category_id)

    post = crud_post.create_post(db, author=current_user, post_in=post_in)
    logger.info(f"Post created: id={post.id}, slug={post.slug}, user={current_user.id}")
    return _enrich_post_response(db, post, current_user)


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Update post",
    description="""
    Update a post. Changing the title regenerates the slug.

    **Access:** Post owner only
    """,
)
def update_post(
    post_id: UUID,
    post_update: PostUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = crud_post.get(db, post_id)
    ensure_access(
        resolve_post_mutation(post, current_user),
        not_found="Post not found",
        forbidden="Unauthorized to update this post",
    )
    _ensure_category_exists(db, post_update.category_id)

    updated_post = crud_post.update_post(db, db_obj=post, post_in=post_update)
    return _enrich_post_response(db, updated_post, current_user)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="""
    Delete a post together with its comments and likes.

    **Access:** Post owner only
    """,
)
def delete_post(
    post_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    post = crud_post.get(db, post_id)
    ensure_access(
        resolve_post_mutation(post, current_user),
        not_found="Post not found",
        forbidden="Unauthorized to delete this post",
    )
    crud_post.remove(db, db_obj=post)
    logger.info(f"Post deleted: id={post_id}, user={current_user.id}")
    return {"message": "Post deleted successfully"}
