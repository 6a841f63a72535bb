"""Shared test fixtures for linkgraph test suite.

Design:
- content_root: isolated blog collection in a temp directory
- write_post / create_post: write a post file with frontmatter
- make_post: in-memory Post for pure index/graph tests
- runner: CliRunner for CLI tests
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner

from linkgraph.models import Post, PostMetadata


def make_post(
    post_id: str,
    body: str = "",
    tags: list[str] | None = None,
    title: str | None = None,
) -> Post:
    """Build an in-memory post."""
    return Post(
        id=post_id,
        body=body,
        data=PostMetadata(title=title or post_id, tags=tags or []),
    )


def create_post(
    content_root: Path,
    rel_path: str,
    title: str,
    body: str = "",
    tags: list[str] | None = None,
    date: str = "2024-01-15",
    draft: bool = False,
) -> Path:
    """Write a post file with YAML frontmatter under content_root."""
    path = content_root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)

    tags_line = f"tags: [{', '.join(tags)}]\n" if tags else ""
    draft_line = "draft: true\n" if draft else ""
    path.write_text(
        f"---\ntitle: {title}\ndate: {date}\n{tags_line}{draft_line}---\n\n{body}\n",
        encoding="utf-8",
    )
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def content_root(tmp_path: Path) -> Generator[Path, None, None]:
    """Empty blog collection; LINKGRAPH_CONTENT_ROOT points at it."""
    root = tmp_path / "content" / "blog"
    root.mkdir(parents=True)

    original = os.environ.get("LINKGRAPH_CONTENT_ROOT")
    os.environ["LINKGRAPH_CONTENT_ROOT"] = str(root)

    yield root

    if original is not None:
        os.environ["LINKGRAPH_CONTENT_ROOT"] = original
    else:
        os.environ.pop("LINKGRAPH_CONTENT_ROOT", None)


@pytest.fixture
def write_post(content_root: Path):
    """Helper for writing posts into the temp collection.

    Usage:
        def test_something(write_post):
            write_post("a.md", "Post A", "See [b](./b)")
    """

    def _write(rel_path: str, title: str, body: str = "", **kwargs) -> Path:
        return create_post(content_root, rel_path, title, body, **kwargs)

    return _write


@pytest.fixture
def sample_blog(content_root: Path, write_post) -> Path:
    """Small collection with nested posts, an index page and an asset.

    Creates:
    - intro.md           links to series (folder) and an external site
    - series/index.mdx   links to ./part-one and /blog/intro
    - series/part-one.md links to ../intro twice and to ./img/diagram.png
    - series/img/diagram.png
    """
    write_post(
        "intro.md",
        "Introduction",
        "Start with [the series](/blog/series/) or [elsewhere](https://example.com).",
        tags=["meta"],
        date="2024-01-01",
    )
    write_post(
        "series/index.mdx",
        "The Series",
        "First read [part one](./part-one). Back to [intro](/blog/intro).",
        tags=["series", "meta"],
        date="2024-02-01",
    )
    write_post(
        "series/part-one.md",
        "Part One",
        "See [intro](../intro) and [intro again](../intro#top).\n\n"
        "![diagram](./img/diagram.png)",
        tags=["series"],
        date="2024-03-01",
    )
    (content_root / "series" / "img").mkdir()
    (content_root / "series" / "img" / "diagram.png").write_bytes(b"\x89PNG")
    return content_root
