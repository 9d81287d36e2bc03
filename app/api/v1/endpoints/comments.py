"""Comment endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_active_user, get_db, get_optional_current_user
from app.core.exceptions import NotFoundException, ensure_access
from app.core.visibility import (
    resolve_comment_mutation,
    resolve_comment_read,
    resolve_post_interaction,
    resolve_post_read,
)
from app.crud import crud_comment, crud_post, crud_user
from app.models.comment import Comment
from app.models.user import User
from app.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentPostSummary,
    CommentResponse,
    CommentUpdate,
)
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)


def _comment_response(
    comment: Comment,
    *,
    include_user: bool = False,
    include_post: bool = False,
) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        user=UserSummary.model_validate(comment.author) if include_user else None,
        post=CommentPostSummary.model_validate(comment.post) if include_post else None,
    )


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a post",
    description="""
    Comment on a published post whose author is active.

    **Access:** Active users
    """,
)
def add_comment(
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    post = crud_post.get(db, comment_in.post_id)
    ensure_access(
        resolve_post_interaction(post, current_user),
        not_found="Post not available for commenting",
    )

    comment = crud_comment.create_comment(
        db,
        post_id=post.id,
        user_id=current_user.id,
        content=comment_in.content,
    )
    return _comment_response(comment, include_user=True)


@router.get(
    "/post/{post_id}",
    response_model=CommentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get comments of a post",
    description="""
    Comments on a post, oldest first. Comments by suspended or deleted
    users are left out.

    **Access:** Anyone who can read the post
    """,
)
def get_post_comments(
    post_id: UUID,
    limit: int = Query(100, ge=1, le=500, description="Maximum number of comments to return"),
    offset: int = Query(0, ge=0, description="Number of comments to skip"),
    include_user_details: bool = Query(False),
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> CommentListResponse:
    post = crud_post.get(db, post_id)
    ensure_access(resolve_post_read(post, viewer), not_found="Post not found or not available")

    comments, total = crud_comment.get_by_post(db, post_id=post_id, skip=offset, limit=limit)
    return CommentListResponse(
        comments=[_comment_response(c, include_user=include_user_details) for c in comments],
        total=total,
    )


@router.get(
    "/user/{user_id}",
    response_model=CommentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get comments by user",
)
def get_user_comments(
    user_id: UUID,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> CommentListResponse:
    """Comments a user left on published posts, with a summary of each post."""
    if not crud_user.get_active(db, user_id):
        raise NotFoundException(detail="User not found or inactive")

    comments, total = crud_comment.get_by_user(db, user_id=user_id, skip=offset, limit=limit)
    return CommentListResponse(
        comments=[_comment_response(c, include_post=True) for c in comments],
        total=total,
    )


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_200_OK,
    summary="Get comment",
)
def get_comment(
    comment_id: int,
    viewer: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    """One comment with its author and post, if the post is readable by the caller."""
    comment = crud_comment.get(db, comment_id)
    ensure_access(resolve_comment_read(comment, viewer), not_found="Comment not found")
    return _comment_response(comment, include_user=True, include_post=True)


@router.patch(
    "/{comment_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_200_OK,
    summary="Update comment",
    description="""
    Edit a comment. The post must still be readable.

    **Access:** Comment owner or admin
    """,
)
def update_comment(
    comment_id: int,
    comment_in: CommentUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    comment = crud_comment.get(db, comment_id)
    ensure_access(
        resolve_comment_mutation(comment, current_user),
        not_found="Comment not found",
        forbidden="Unauthorized to update this comment",
    )
    ensure_access(
        resolve_post_interaction(comment.post, current_user),
        not_found="Post not available",
    )

    updated = crud_comment.update_content(db, db_obj=comment, content=comment_in.content)
    return _comment_response(updated, include_user=True)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
    description="""
    Delete a comment.

    **Access:** Comment owner or admin
    """,
)
def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    comment = crud_comment.get(db, comment_id)
    ensure_access(
        resolve_comment_mutation(comment, current_user),
        not_found="Comment not found",
        forbidden="Unauthorized to delete this comment",
    )

    crud_comment.remove(db, db_obj=comment)
    logger.info(f"Comment {comment_id} deleted by user {current_user.id}")
    return {"message": "Comment deleted successfully"}
