"""Markdown parsing with frontmatter and link extraction."""

from .links import (
    MarkdownLink,
    extract_links,
    get_parent_id,
    is_external,
    is_subpost,
    iter_markdown_links,
    normalize_id,
    resolve_link_to_id,
)
from .markdown import ParseError, parse_post, post_id_for

__all__ = [
    "MarkdownLink",
    "ParseError",
    "extract_links",
    "get_parent_id",
    "is_external",
    "is_subpost",
    "iter_markdown_links",
    "normalize_id",
    "parse_post",
    "post_id_for",
    "resolve_link_to_id",
]
