"""Configuration management for linkgraph.

This module contains all configurable constants for link resolution and the
graph dataset. Magic values are documented here rather than scattered
throughout the codebase.
"""

import os
from pathlib import Path


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""

    pass


# =============================================================================
# Content Location
# =============================================================================

# Content collection directory, relative to the site checkout.
DEFAULT_CONTENT_ROOT = Path("src/content/blog")

# File extensions treated as posts. Anything else under the content root is
# an asset (images, downloads) and only matters to the link checker.
CONTENT_EXTENSIONS = (".md", ".mdx")


def get_content_root(override: str | Path | None = None) -> Path:
    """Get the content collection root directory.

    Discovery order:
    1. Explicit override (CLI option, tests)
    2. LINKGRAPH_CONTENT_ROOT environment variable
    3. DEFAULT_CONTENT_ROOT relative to the working directory

    Raises:
        ConfigurationError: If the resolved directory does not exist.
    """
    if override is not None:
        root = Path(override)
    else:
        env_root = os.environ.get("LINKGRAPH_CONTENT_ROOT")
        root = Path(env_root) if env_root else DEFAULT_CONTENT_ROOT

    if not root.is_dir():
        raise ConfigurationError(
            f"Content root does not exist: {root}. "
            "Pass --content-root or set LINKGRAPH_CONTENT_ROOT."
        )
    return root


# =============================================================================
# Link Resolution
# =============================================================================

# Absolute links into the blog collection look like /blog/<post-id>.
BLOG_ROUTE_PREFIX = "/blog/"

# A folder's landing post has id "<folder>/index"; it is the same node as
# "<folder>" for backlinks and the graph.
INDEX_SUFFIX = "/index"


# =============================================================================
# Graph Dataset
# =============================================================================

# Tag node ids are "tag-<name>" so they never collide with post ids.
TAG_NODE_PREFIX = "tag-"

# Node sizes for the force layout; posts render larger than tags.
POST_NODE_VAL = 2
TAG_NODE_VAL = 1

# Default colours. The client theme may override them.
POST_NODE_COLOR = "rgba(255, 255, 255, 0.8)"
TAG_NODE_COLOR = "#a855f7"

# Link strengths; post-to-post references pull harder than shared tags.
TAG_LINK_VALUE = 1
POST_LINK_VALUE = 2


# =============================================================================
# Web Server
# =============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
