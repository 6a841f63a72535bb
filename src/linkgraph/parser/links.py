"""Markdown link extraction and post identifier resolution.

Identifiers are POSIX-style paths relative to the content root, without an
extension ("series/part-one"). A folder's landing post is "<folder>/index"
and is treated as the same post as "<folder>" (see normalize_id).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import NamedTuple
from urllib.parse import unquote

from ..config import BLOG_ROUTE_PREFIX, INDEX_SUFFIX

# Pattern for [label](href) syntax - captures the href between parentheses.
# Non-greedy on both parts so that several links on one line stay separate.
LINK_PATTERN = re.compile(r"\[.*?\]\((.*?)\)")

# Characters that never appear in a real href but do appear in code that
# happens to look like a link, e.g. C++ lambdas "[](int a, int b) { ... }".
SUSPICIOUS_HREF = re.compile(r"[\s<>{};]")

# RFC 3986 scheme prefix: http:, https:, ftp:, mailto:, ...
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class MarkdownLink(NamedTuple):
    """A single [label](href) occurrence."""

    text: str  # Full match, e.g. "[see](./other)"
    href: str


def iter_markdown_links(content: str, *, strict: bool = False) -> Iterator[MarkdownLink]:
    """Yield every inline markdown link in content.

    Each call scans with a fresh iterator, so concurrent callers never share
    scan position.

    Args:
        content: Raw markdown text.
        strict: Skip hrefs containing whitespace or any of "<>{};".

    Yields:
        MarkdownLink for each occurrence, in document order.
    """
    for match in LINK_PATTERN.finditer(content):
        href = match.group(1)
        if strict and SUSPICIOUS_HREF.search(href):
            continue
        yield MarkdownLink(match.group(0), href)


def extract_links(content: str, *, strict: bool = False) -> Iterator[str]:
    """Lazily extract raw href strings from markdown content.

    Repeated links are yielded once per occurrence.
    """
    for link in iter_markdown_links(content, strict=strict):
        yield link.href


def strip_fragment(href: str) -> str:
    """Remove any "#fragment" and "?query" suffix."""
    return href.split("#", 1)[0].split("?", 1)[0]


def is_external(href: str) -> bool:
    """True for hrefs that point outside the site (scheme, //host, mailto:)."""
    return href.startswith("//") or SCHEME_PATTERN.match(href) is not None


def resolve_link_to_id(href: str, source_id: str) -> str | None:
    """Resolve a link href to a post identifier.

    Resolution is purely syntactic: the result is not checked against the
    corpus, so a link to a missing post still yields an identifier.

    Args:
        href: Raw href as written in the markdown.
        source_id: Identifier of the post containing the link.

    Returns:
        Target identifier (not normalized), or None when the link is
        external or outside the blog collection.
    """
    url = strip_fragment(href)

    # Fragment-only links ("#heading") stay on the current post
    if not url:
        return source_id

    if is_external(url):
        return None

    url = unquote(url)

    if url.startswith(BLOG_ROUTE_PREFIX):
        # Strips every trailing slash ("/blog/x//" is "x"); ids never end in "/"
        target = url[len(BLOG_ROUTE_PREFIX):].rstrip("/")
        # "/blog/" itself is the post listing, not a post
        return target or None

    if url.startswith("/"):
        return None

    return _resolve_relative_link(source_id, url)


def _resolve_relative_link(source_id: str, target: str) -> str:
    """Join a relative link onto the directory of source_id.

    "." segments are ignored and ".." pops one segment; excess ".." segments
    stop at the content root instead of failing.
    """
    result_parts = source_id.split("/")[:-1]  # Parent directory

    for part in target.split("/"):
        if part == "..":
            if result_parts:
                result_parts.pop()
        elif part in (".", ""):
            continue
        else:
            result_parts.append(part)

    return "/".join(result_parts)


def normalize_id(post_id: str) -> str:
    """Collapse a folder index id ("a/index") onto its folder id ("a").

    Repeated suffixes ("a/index/index") are all stripped so that
    normalize_id(normalize_id(x)) == normalize_id(x).
    """
    while post_id.endswith(INDEX_SUFFIX):
        post_id = post_id[: -len(INDEX_SUFFIX)]
    return post_id


def is_subpost(post_id: str) -> bool:
    """True for nested posts such as "series/part-one"."""
    return "/" in post_id


def get_parent_id(post_id: str) -> str:
    """Top-level post that a subpost belongs to."""
    return post_id.split("/", 1)[0]
