"""Loading posts from the content collection directory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .config import CONTENT_EXTENSIONS
from .models import Post
from .parser import ParseError, parse_post

log = logging.getLogger(__name__)


def iter_content_files(content_root: Path) -> Iterator[Path]:
    """Yield post files under content_root, skipping "_"-prefixed ones."""
    for path in sorted(content_root.rglob("*")):
        if not path.is_file() or path.suffix not in CONTENT_EXTENSIONS:
            continue
        rel_parts = path.relative_to(content_root).parts
        if any(part.startswith("_") for part in rel_parts):
            continue
        yield path


def _sort_key(post: Post) -> tuple:
    # Newest first; undated posts last; id breaks ties for a stable order
    date = post.data.date
    return (date is None, -date.toordinal() if date else 0, post.id)


def load_posts(content_root: Path, include_drafts: bool = False) -> list[Post]:
    """Load all posts and subposts from the content collection.

    Files that fail to parse are logged and skipped.

    Args:
        content_root: Root directory of the blog collection.
        include_drafts: Keep posts marked "draft: true".

    Returns:
        Posts sorted newest first.
    """
    posts: list[Post] = []
    for path in iter_content_files(content_root):
        try:
            post = parse_post(path, content_root)
        except ParseError as e:
            log.warning("Skipping %s", e)
            continue

        if post.data.draft and not include_drafts:
            log.debug("Skipping draft %s", post.id)
            continue
        posts.append(post)

    posts.sort(key=_sort_key)
    log.debug("Loaded %d posts from %s", len(posts), content_root)
    return posts
