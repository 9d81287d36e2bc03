"""Visibility and authorization rules shared by every controller.

Rules, in precedence order (first failing rule wins):

1. The acting user must be active and not soft-deleted to write anything.
2. Content whose author is not active is hidden (not found) from everyone,
   the author included.
3. An unpublished post is visible only to its owner and to admins.
4. Posts are mutated by their owner only; comments by their owner or an admin.
5. Categories are mutated by admins only.

Every predicate works on already-loaded objects and has no side effects.
The SQL clauses at the bottom express the same rules for list queries.
"""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import and_, or_, true

from app.models.comment import Comment
from app.models.post import Post
from app.models.user import User


class Access(str, Enum):
    """Outcome of a visibility/authorization check."""

    ALLOWED = "allowed"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


def is_active_user(user: Optional[User]) -> bool:
    return user is not None and bool(user.is_active)


def is_admin(user: Optional[User]) -> bool:
    return is_active_user(user) and user.is_admin


def is_owner(user: Optional[User], entity: Any) -> bool:
    return user is not None and entity.user_id == user.id


def can_write(actor: Optional[User]) -> Access:
    """Rule 1: only active accounts may write."""
    if not is_active_user(actor):
        return Access.FORBIDDEN
    return Access.ALLOWED


def resolve_post_read(post: Optional[Post], viewer: Optional[User]) -> Access:
    """Whether ``viewer`` (possibly anonymous) may read ``post``."""
    if post is None or not is_active_user(post.author):
        return Access.NOT_FOUND
    if not post.is_published and not (is_owner(viewer, post) or is_admin(viewer)):
        return Access.NOT_FOUND
    return Access.ALLOWED


def resolve_post_interaction(post: Optional[Post], actor: Optional[User]) -> Access:
    """Whether ``actor`` may comment on or like ``post``.

    Interaction requires a published post from an active author.
    """
    access = can_write(actor)
    if access is not Access.ALLOWED:
        return access
    if post is None or not post.is_published or not is_active_user(post.author):
        return Access.NOT_FOUND
    return Access.ALLOWED


def resolve_post_mutation(post: Optional[Post], actor: Optional[User]) -> Access:
    """Whether ``actor`` may update or delete ``post``."""
    access = can_write(actor)
    if access is not Access.ALLOWED:
        return access
    if post is None or not is_active_user(post.author):
        return Access.NOT_FOUND
    if not is_owner(actor, post):
        return Access.FORBIDDEN
    return Access.ALLOWED


def resolve_comment_read(comment: Optional[Comment], viewer: Optional[User]) -> Access:
    if comment is None or not is_active_user(comment.author):
        return Access.NOT_FOUND
    return resolve_post_read(comment.post, viewer)


def resolve_comment_mutation(comment: Optional[Comment], actor: Optional[User]) -> Access:
    """Whether ``actor`` may update or delete ``comment`` (owner or admin)."""
    access = can_write(actor)
    if access is not Access.ALLOWED:
        return access
    if comment is None or not is_active_user(comment.author):
        return Access.NOT_FOUND
    if comment.post is None or not is_active_user(comment.post.author):
        return Access.NOT_FOUND
    if not (is_owner(actor, comment) or is_admin(actor)):
        return Access.FORBIDDEN
    return Access.ALLOWED


def resolve_category_mutation(actor: Optional[User]) -> Access:
    access = can_write(actor)
    if access is not Access.ALLOWED:
        return access
    if not is_admin(actor):
        return Access.FORBIDDEN
    return Access.ALLOWED


# ----- SQL clauses -----

def active_author_clause():
    """Filter for rows joined to an active, non-deleted ``User``."""
    return User.is_active


def visible_posts_clause(viewer: Optional[User] = None, *, include_drafts: bool = False):
    """Filter for posts ``viewer`` may see in a listing.

    Requires ``Post`` joined to its author ``User``. Drafts are listed only
    when asked for: the viewer's own, or every draft for an admin.
    """
    published = Post.is_published.is_(True)
    if include_drafts and is_admin(viewer):
        drafts = true()
    elif include_drafts and is_active_user(viewer):
        drafts = Post.user_id == viewer.id
    else:
        drafts = None

    visibility = published if drafts is None else or_(published, drafts)
    return and_(active_author_clause(), visibility)
