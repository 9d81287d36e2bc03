"""Like endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_active_user, get_db, get_optional_current_user
from app.core.exceptions import ConflictException, ensure_access
from app.core.visibility import resolve_post_interaction, resolve_post_read
from app.crud import crud_like, crud_post
from app.models.like import Like
from app.models.user import User
from app.schemas.like import (
    LikeCountResponse,
    LikeCreate,
    LikeListResponse,
    LikePostSummary,
    LikeResponse,
    LikeStatusResponse,
)
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/likes",
    tags=["Likes"],
)


def _like_response(like: Like, *, include_user: bool = False, include_post: bool = False) -> LikeResponse:
    return LikeResponse(
        user_id=like.user_id,
        post_id=like.post_id,
        created_at=like.created_at,
        user=UserSummary.model_validate(like.user) if include_user else None,
        post=LikePostSummary.model_validate(like.post) if include_post else None,
    )


@router.post(
    "",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like a post",
    description="""
    Like a published post whose author is active. A user likes a post
    at most once.

    **Access:** Active users
    """,
)
def like_post(
    like_in: LikeCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeResponse:
    post = crud_post.get(db, like_in.post_id)
    ensure_access(
        resolve_post_interaction(post, current_user),
        not_found="Post not found or not available",
    )

    if crud_like.get_like(db, post_id=post.id, user_id=current_user.id):
        raise ConflictException(detail="Post already liked")

    like = crud_like.like(db, post_id=post.id, user_id=current_user.id)
    return _like_response(like)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_200_OK,
    summary="Unlike a post",
    description="""
    Remove the current user's like from a post. Removing a like that does
    not exist is not an error.

    **Access:** Active users
    """,
)
def unlike_post(
    post_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    removed = crud_like.unlike(db, post_id=post_id, user_id=current_user.id)
    if not removed:
        logger.debug(f"Unlike without like: post={post_id}, user={current_user.id}")
    return {"message": "Post unliked successfully"}


@router.get(
    "/check/{post_id}",
    response_model=LikeStatusResponse,
    status_code=status.HTTP_200_OK,
    summary="Check if post is liked",
)
def check_like(
    post_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeStatusResponse:
    """Whether the current user has liked the post."""
    post = crud_post.get(db, post_id)
    ensure_access(resolve_post_read(post, current_user), not_found="Post not found or not available")
    liked = crud_like.get_like(db, post_id=post_id, user_id=current_user.id) is not None
    return LikeStatusResponse(post_id=post_id, liked=liked)


@router.get(
    "/my-likes",
    response_model=LikeListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get my likes",
    description="""
    Likes of the current user on published posts of active authors.

    **Access:** Active users
    """,
)
def get_my_likes(
    include_post_details: bool = Query(False),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> LikeListResponse:
    likes, total = crud_like.get_by_user(db, user_id=current_user.id, skip=offset, limit=limit)
    return LikeListResponse(
        likes=[_like_response(like, include_post=include_post_details) for like in likes],
        total=total,
    )


@router.get(
    "/post/{post_id}",
    response_model=LikeListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get likes of a post",
)
def get_post_likes(
    post_id: UUID,
    include_user_details: bool = Query(False),
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> LikeListResponse:
    """Likes on a readable post. Likes from inactive users are left out."""
    post = crud_post.get(db, post_id)
    ensure_access(resolve_post_read(post, viewer), not_found="Post not found or not available")

    likes = crud_like.get_by_post(db, post_id=post_id)
    return LikeListResponse(
        likes=[_like_response(like, include_user=include_user_details) for like in likes],
        total=len(likes),
    )


@router.get(
    "/count/{post_id}",
    response_model=LikeCountResponse,
    status_code=status.HTTP_200_OK,
    summary="Count likes of a post",
)
def count_post_likes(
    post_id: UUID,
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> LikeCountResponse:
    post = crud_post.get(db, post_id)
    ensure_access(resolve_post_read(post, viewer), not_found="Post not found or not available")
    return LikeCountResponse(post_id=post_id, count=crud_post.count_likes(db, post_id=post_id))
