"""Tests for the graph dataset builder."""

from __future__ import annotations

import json
from pathlib import Path

from conftest import make_post

from linkgraph.config import POST_NODE_VAL, TAG_NODE_VAL
from linkgraph.content import load_posts
from linkgraph.graph import build_graph, graph_to_json, tag_node_id


def _link_keys(graph) -> list[tuple[str, str, int]]:
    return [(link.source, link.target, link.value) for link in graph.links]


class TestBuildGraph:
    def test_two_posts_shared_tag_and_reference(self):
        posts = [
            make_post("a", "Read [b](./b)", tags=["python"], title="Post A"),
            make_post("b", "", tags=["python"], title="Post B"),
        ]

        graph = build_graph(posts)

        assert [(n.id, n.group) for n in graph.nodes] == [
            ("a", "post"),
            ("b", "post"),
            ("tag-python", "tag"),
        ]
        assert _link_keys(graph) == [
            ("a", "tag-python", 1),
            ("b", "tag-python", 1),
            ("a", "b", 2),
        ]

    def test_link_to_missing_post_adds_no_edge(self):
        posts = [
            make_post("a", "Read [c](./c)", tags=["python"]),
            make_post("b", "", tags=["python"]),
        ]

        graph = build_graph(posts)

        assert len(graph.nodes) == 3
        assert _link_keys(graph) == [("a", "tag-python", 1), ("b", "tag-python", 1)]

    def test_node_attributes(self):
        graph = build_graph([make_post("a", tags=["rust"], title="Post A")])
        post_node, tag_node = graph.nodes

        assert post_node.name == "Post A"
        assert post_node.val == POST_NODE_VAL
        assert tag_node.name == "#rust"
        assert tag_node.val == TAG_NODE_VAL
        assert TAG_NODE_VAL < POST_NODE_VAL
        assert post_node.color != tag_node.color

    def test_tag_nodes_in_first_seen_order(self):
        posts = [
            make_post("a", tags=["z", "m"]),
            make_post("b", tags=["a", "z"]),
        ]

        graph = build_graph(posts)

        tag_ids = [n.id for n in graph.nodes if n.group == "tag"]
        assert tag_ids == ["tag-z", "tag-m", "tag-a"]

    def test_tag_ids_do_not_collide_with_posts(self):
        graph = build_graph([make_post("python", tags=["python"])])

        ids = [n.id for n in graph.nodes]
        assert ids == ["python", "tag-python"]
        assert len(set(ids)) == len(ids)

    def test_tag_id_taken_by_post_is_prefixed_again(self):
        posts = [make_post("tag-python", tags=["x"]), make_post("a", tags=["python"])]

        graph = build_graph(posts)

        ids = [n.id for n in graph.nodes]
        assert ids == ["tag-python", "a", "tag-x", "tag-tag-python"]
        assert ("a", "tag-tag-python", 1) in _link_keys(graph)
        assert not any(link.target == "tag-python" for link in graph.links)
        assert {n.name for n in graph.nodes if n.group == "tag"} == {"#x", "#python"}
        node_ids = set(ids)
        assert all(link.source in node_ids and link.target in node_ids for link in graph.links)

    def test_index_alias_resolves_to_actual_post_id(self):
        posts = [
            make_post("series/index", "[part](./part-one)"),
            make_post("series/part-one", "[up](/blog/series) [up again](./index)"),
        ]

        graph = build_graph(posts)

        assert _link_keys(graph) == [
            ("series/index", "series/part-one", 2),
            ("series/part-one", "series/index", 2),
        ]

    def test_self_links_excluded(self):
        posts = [make_post("guide/index", "[me](/blog/guide) [top](#intro) [same](./index)")]

        graph = build_graph(posts)

        assert graph.links == []

    def test_duplicate_references_emitted_once(self):
        posts = [make_post("a", "[b](./b) [b](/blog/b/) [b](b#x)"), make_post("b")]

        graph = build_graph(posts)

        assert _link_keys(graph) == [("a", "b", 2)]

    def test_every_link_endpoint_is_a_node(self, sample_blog: Path):
        graph = build_graph(load_posts(sample_blog))

        node_ids = {n.id for n in graph.nodes}
        assert len(node_ids) == len(graph.nodes)
        for link in graph.links:
            assert link.source in node_ids
            assert link.target in node_ids

    def test_deterministic(self, sample_blog: Path):
        posts = load_posts(sample_blog)
        assert graph_to_json(build_graph(posts)) == graph_to_json(build_graph(posts))

    def test_empty_corpus(self):
        graph = build_graph([])
        assert graph.nodes == []
        assert graph.links == []


class TestTagNodeId:
    def test_plain(self):
        assert tag_node_id("python") == "tag-python"

    def test_prefixed_until_free(self):
        assert tag_node_id("python", {"tag-python", "tag-tag-python"}) == "tag-tag-tag-python"


class TestGraphJson:
    def test_shape(self):
        graph = build_graph([make_post("a", "[b](./b)", tags=["t"]), make_post("b")])

        payload = json.loads(graph_to_json(graph))

        assert set(payload) == {"nodes", "links"}
        assert set(payload["nodes"][0]) == {"id", "name", "val", "group", "color"}
        assert set(payload["links"][0]) == {"source", "target", "value"}

    def test_missing_color_omitted(self):
        graph = build_graph([make_post("a")])
        graph.nodes[0].color = None

        payload = json.loads(graph_to_json(graph))

        assert "color" not in payload["nodes"][0]
