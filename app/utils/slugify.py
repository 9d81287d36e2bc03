"""Slug generation for posts and categories.

Examples:
    'Hello World!'                 -> 'hello-world'
    'Hello World' (already taken)  -> 'hello-world-1'
    'Café & Crème'                 -> 'cafe-creme'
"""

import re
from typing import Iterable, Optional

from unidecode import unidecode

DEFAULT_FALLBACK = "untitled"

_DISALLOWED_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+", re.ASCII)
_HYPHEN_RUN = re.compile(r"-+")


def slugify(text: str, max_length: Optional[int] = None) -> str:
    """Turn arbitrary text into a lower-case, hyphenated, ASCII slug.

    May return an empty string when nothing usable is left.
    """
    if not text:
        return ""
    slug = unidecode(str(text)).lower()
    slug = _DISALLOWED_CHARS.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug.strip())
    slug = _HYPHEN_RUN.sub("-", slug).strip("-")
    if max_length is not None:
        slug = slug[:max_length].rstrip("-")
    return slug


def generate_slug(
    title: str,
    existing_slugs: Iterable[str] = (),
    *,
    fallback: str = DEFAULT_FALLBACK,
    max_length: Optional[int] = None,
) -> str:
    """Build a slug from ``title`` that is not in ``existing_slugs``.

    Collisions get a numeric suffix: base, base-1, base-2, ...
    A title that reduces to nothing (e.g. '!!!') uses ``fallback`` as base.

    Args:
        title: Display title (post title or category name)
        existing_slugs: Slugs already in use within the same scope
        fallback: Base used when the title yields an empty slug
        max_length: Optional cap on the whole slug, suffix included

    Returns:
        A deterministic slug that does not collide with ``existing_slugs``
    """
    base = slugify(title, max_length=max_length) or fallback
    taken = set(existing_slugs)

    candidate = base
    counter = 1
    while candidate in taken:
        suffix = f"-{counter}"
        stem = base if max_length is None else base[: max_length - len(suffix)].rstrip("-")
        candidate = f"{stem}{suffix}"
        counter += 1
    return candidate
