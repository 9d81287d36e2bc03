import uuid

from app.core.visibility import (
    Access,
    resolve_category_mutation,
    resolve_comment_mutation,
    resolve_comment_read,
    resolve_post_interaction,
    resolve_post_mutation,
    resolve_post_read,
)
from app.models.comment import Comment
from app.models.post import Post
from app.models.user import AccountStatus, User, UserRole


def make_user(role=UserRole.USER, status=AccountStatus.ACTIVE):
    return User(id=uuid.uuid4(), username="u", email="u@example.com", role=role, status=status)


def make_post(author, is_published=True):
    return Post(id=uuid.uuid4(), user_id=author.id, author=author, is_published=is_published)


def make_comment(author, post):
    return Comment(id=1, user_id=author.id, author=author, post_id=post.id, post=post)


def test_published_post_readable_by_anyone():
    post = make_post(make_user())
    assert resolve_post_read(post, None) is Access.ALLOWED
    assert resolve_post_read(post, make_user()) is Access.ALLOWED


def test_missing_post_not_found():
    assert resolve_post_read(None, make_user()) is Access.NOT_FOUND


def test_draft_visible_to_owner_and_admin_only():
    owner = make_user()
    draft = make_post(owner, is_published=False)
    assert resolve_post_read(draft, owner) is Access.ALLOWED
    assert resolve_post_read(draft, make_user(role=UserRole.ADMIN)) is Access.ALLOWED
    assert resolve_post_read(draft, make_user()) is Access.NOT_FOUND
    assert resolve_post_read(draft, None) is Access.NOT_FOUND


def test_inactive_author_hides_post_from_everyone():
    author = make_user(status=AccountStatus.SUSPENDED)
    post = make_post(author)
    assert resolve_post_read(post, None) is Access.NOT_FOUND
    assert resolve_post_read(post, author) is Access.NOT_FOUND
    assert resolve_post_read(post, make_user(role=UserRole.ADMIN)) is Access.NOT_FOUND


def test_interaction_needs_active_actor_and_published_post():
    author = make_user()
    assert resolve_post_interaction(make_post(author), make_user()) is Access.ALLOWED
    assert resolve_post_interaction(make_post(author), None) is Access.FORBIDDEN
    suspended = make_user(status=AccountStatus.SUSPENDED)
    assert resolve_post_interaction(make_post(author), suspended) is Access.FORBIDDEN
    assert resolve_post_interaction(make_post(author, is_published=False), author) is Access.NOT_FOUND


def test_post_mutation_is_owner_only():
    owner = make_user()
    post = make_post(owner)
    assert resolve_post_mutation(post, owner) is Access.ALLOWED
    assert resolve_post_mutation(post, make_user()) is Access.FORBIDDEN
    assert resolve_post_mutation(post, make_user(role=UserRole.ADMIN)) is Access.FORBIDDEN


def test_inactive_actor_is_checked_first():
    owner = make_user(status=AccountStatus.DELETED)
    assert resolve_post_mutation(None, owner) is Access.FORBIDDEN


def test_comment_mutation_owner_or_admin():
    author = make_user()
    commenter = make_user()
    comment = make_comment(commenter, make_post(author))
    assert resolve_comment_mutation(comment, commenter) is Access.ALLOWED
    assert resolve_comment_mutation(comment, make_user(role=UserRole.ADMIN)) is Access.ALLOWED
    assert resolve_comment_mutation(comment, author) is Access.FORBIDDEN


def test_comment_by_inactive_user_not_found():
    commenter = make_user(status=AccountStatus.SUSPENDED)
    comment = make_comment(commenter, make_post(make_user()))
    assert resolve_comment_read(comment, None) is Access.NOT_FOUND
    assert resolve_comment_mutation(comment, make_user(role=UserRole.ADMIN)) is Access.NOT_FOUND


def test_suspended_admin_has_no_admin_rights():
    admin = make_user(role=UserRole.ADMIN, status=AccountStatus.SUSPENDED)
    assert resolve_category_mutation(admin) is Access.FORBIDDEN
    assert resolve_category_mutation(make_user()) is Access.FORBIDDEN
    assert resolve_category_mutation(make_user(role=UserRole.ADMIN)) is Access.ALLOWED


def test_comment_under_inactive_post_author_not_found():
    author = make_user(status=AccountStatus.SUSPENDED)
    commenter = make_user()
    comment = make_comment(commenter, make_post(author))
    assert resolve_comment_mutation(comment, commenter) is Access.NOT_FOUND
    assert resolve_comment_read(comment, commenter) is Access.NOT_FOUND
