"""Graph dataset for the force-directed post/tag visualization."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import (
    POST_LINK_VALUE,
    POST_NODE_COLOR,
    POST_NODE_VAL,
    TAG_LINK_VALUE,
    TAG_NODE_COLOR,
    TAG_NODE_PREFIX,
    TAG_NODE_VAL,
)
from .models import GraphData, GraphLink, GraphNode, Post
from .parser import extract_links, normalize_id, resolve_link_to_id

log = logging.getLogger(__name__)


def tag_node_id(tag: str, taken: set[str] | frozenset[str] = frozenset()) -> str:
    """Node id for a tag, prefixed again until it is not among taken ids."""
    node_id = f"{TAG_NODE_PREFIX}{tag}"
    while node_id in taken:
        node_id = f"{TAG_NODE_PREFIX}{node_id}"
    return node_id


def build_graph(posts: Sequence[Post]) -> GraphData:
    """Build nodes and links for posts, their tags and their references.

    Node and link order follows the order of posts; tag nodes follow all
    post nodes in first-seen order. Each (source, target) pair is emitted
    once.

    Args:
        posts: The corpus, in display order.

    Returns:
        GraphData ready to serialize as graph.json.
    """
    nodes: list[GraphNode] = []
    links: list[GraphLink] = []
    link_keys: set[tuple[str, str]] = set()
    tags: dict[str, str] = {}  # Tag -> node id, in first-seen order
    taken_ids = {post.id for post in posts}

    def add_link(source: str, target: str, value: int) -> None:
        key = (source, target)
        if key in link_keys:
            return
        link_keys.add(key)
        links.append(GraphLink(source=source, target=target, value=value))

    # Post nodes and post -> tag links
    for post in posts:
        nodes.append(
            GraphNode(
                id=post.id,
                name=post.title,
                val=POST_NODE_VAL,
                group="post",
                color=POST_NODE_COLOR,
            )
        )
        for tag in post.tags:
            if tag not in tags:
                tags[tag] = tag_node_id(tag, taken_ids)
                taken_ids.add(tags[tag])
            add_link(post.id, tags[tag], TAG_LINK_VALUE)

    for tag, node_id in tags.items():
        nodes.append(
            GraphNode(
                id=node_id,
                name=f"#{tag}",
                val=TAG_NODE_VAL,
                group="tag",
                color=TAG_NODE_COLOR,
            )
        )

    # Normalized id -> actual post id; first post wins if two collapse
    known_ids: dict[str, str] = {}
    for post in posts:
        known_ids.setdefault(normalize_id(post.id), post.id)

    # Post -> post references
    for post in posts:
        for href in extract_links(post.body):
            target = resolve_link_to_id(href, post.id)
            if target is None:
                continue
            found_id = known_ids.get(normalize_id(target))
            if found_id is None or found_id == post.id:
                continue
            add_link(post.id, found_id, POST_LINK_VALUE)

    log.debug("Built graph: %d nodes (%d tags), %d links", len(nodes), len(tags), len(links))
    return GraphData(nodes=nodes, links=links)


def graph_to_json(graph: GraphData, *, indent: int | None = None) -> str:
    """Serialize graph data, omitting unset optional fields such as color."""
    return graph.model_dump_json(exclude_none=True, indent=indent)
