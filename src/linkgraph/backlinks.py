"""Backlink index and cache.

The index maps each normalized target id to the posts that link to it. It is
built in a single pass over the corpus, O(total links), and kept in an
explicit BacklinkCache until reset().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from .models import Post
from .parser import extract_links, normalize_id, resolve_link_to_id

log = logging.getLogger(__name__)


class BacklinkIndex:
    """Reverse adjacency of the link graph: target id -> source posts."""

    def __init__(self, entries: dict[str, dict[str, Post]] | None = None) -> None:
        # target -> {source id: source post}; dicts keep insertion order
        self._entries = entries or {}

    @classmethod
    def build(cls, posts: Iterable[Post]) -> BacklinkIndex:
        """Build the index, visiting each post exactly once.

        Args:
            posts: Posts in corpus order. May be a one-shot iterator.

        Returns:
            A new index. Repeated links between the same pair count once.
        """
        entries: dict[str, dict[str, Post]] = {}
        post_count = 0
        link_count = 0

        for source in posts:
            post_count += 1
            for href in extract_links(source.body):
                target = resolve_link_to_id(href, source.id)
                if target is None:
                    continue
                link_count += 1
                sources = entries.setdefault(normalize_id(target), {})
                sources.setdefault(source.id, source)

        log.debug(
            "Built backlink index: %d posts, %d internal links, %d targets",
            post_count,
            link_count,
            len(entries),
        )
        return cls(entries)

    def sources_for(self, target_id: str) -> list[Post]:
        """Posts linking to target_id (normalized), without self-exclusion."""
        return list(self._entries.get(normalize_id(target_id), {}).values())

    def targets(self) -> list[str]:
        return list(self._entries)

    def to_dict(self) -> dict[str, list[str]]:
        """Plain mapping of target id to source ids, for JSON output."""
        return {target: list(sources) for target, sources in self._entries.items()}

    def __contains__(self, target_id: object) -> bool:
        return isinstance(target_id, str) and normalize_id(target_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def backlinks_for(index: BacklinkIndex, post_id: str) -> list[Post]:
    """Posts that reference post_id, in discovery order.

    Self references are dropped by comparing normalized ids, so "a/index"
    linking to "/blog/a" is not its own backlink.
    """
    normalized = normalize_id(post_id)
    return [post for post in index.sources_for(normalized) if normalize_id(post.id) != normalized]


class BacklinkCache:
    """Lazily built backlink index over a corpus snapshot.

    The cache is either uninitialized or built. It builds on first use and
    stays built until reset(); it never notices corpus changes on its own.
    """

    def __init__(self, loader: Callable[[], Sequence[Post]]) -> None:
        """Initialize the cache.

        Args:
            loader: Returns the current posts; called once per build.
        """
        self._loader = loader
        self._posts: list[Post] | None = None
        self._by_id: dict[str, Post] = {}  # Normalized id -> post
        self._index: BacklinkIndex | None = None

    @property
    def is_built(self) -> bool:
        return self._index is not None

    def ensure(self) -> BacklinkIndex:
        """Return the index, building it on first call."""
        if self._index is None:
            posts = list(self._loader())
            index = BacklinkIndex.build(posts)
            by_id: dict[str, Post] = {}
            for post in posts:
                by_id.setdefault(normalize_id(post.id), post)
            # Publish only complete results; a racing duplicate build just
            # overwrites with an equivalent snapshot.
            self._posts = posts
            self._by_id = by_id
            self._index = index
            log.info("Backlink index built for %d posts", len(posts))
        return self._index

    @property
    def posts(self) -> list[Post]:
        """The corpus snapshot the current index was built from."""
        self.ensure()
        return self._posts or []

    def get_post(self, post_id: str) -> Post | None:
        """Post for post_id; a folder id ("a") finds its index post ("a/index")."""
        self.ensure()
        return self._by_id.get(normalize_id(post_id))

    def backlinks_for(self, post_id: str) -> list[Post]:
        return backlinks_for(self.ensure(), post_id)

    def reset(self) -> None:
        """Drop the built index; the next query rebuilds from the loader."""
        self._posts = None
        self._by_id = {}
        self._index = None
