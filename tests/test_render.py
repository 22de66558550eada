from __future__ import annotations

import unittest

from cultural_dna_map.models.types import Graph, Link, Node, TrackRecord
from cultural_dna_map.pipeline.graph_builder import build_genre_focus_graph, build_track_graph
from cultural_dna_map.ui.render import build_network, node_color_hint, node_size_hint, render_graph_html
from cultural_dna_map.ui.styles import NODE_SIZES, PALETTE

SHUTDOWN = TrackRecord(name="Shutdown", artist="Skepta", track_id="1064208436")


class RenderHintTests(unittest.TestCase):
    def test_size_hints_by_role(self) -> None:
        graph = build_genre_focus_graph("grime", ["Eskibeat"], context_track=SHUTDOWN)
        sizes = {node.id: node_size_hint(node) for node in graph.nodes}
        self.assertEqual(NODE_SIZES["context"], sizes["track:1064208436"])
        self.assertEqual(NODE_SIZES["central"], sizes["genre:grime"])
        self.assertEqual(NODE_SIZES["genre"], sizes["genre:eskibeat"])

    def test_central_tag_keeps_tag_color(self) -> None:
        central = Node(id="genre:grime", label="grime", kind="genre", is_central=True)
        self.assertEqual(PALETTE["tag"], node_color_hint(central, preserve_role=True))
        self.assertEqual(PALETTE["central"], node_color_hint(central, preserve_role=False))

    def test_placeholder_color_wins(self) -> None:
        node = Node(id="genre:jazz", label="jazz", kind="genre", is_central=True, is_placeholder=True)
        self.assertEqual(PALETTE["placeholder"], node_color_hint(node, preserve_role=True))


class RenderGraphTests(unittest.TestCase):
    def test_network_mirrors_graph(self) -> None:
        graph = build_track_graph(SHUTDOWN, ["grime", "uk rap"])
        net = build_network(graph)
        self.assertEqual(graph.node_ids(), [node["id"] for node in net.nodes])
        self.assertEqual(2, len(net.edges))

        html = render_graph_html(graph)
        self.assertIn("tag:grime", html)
        self.assertIn("track:1064208436", html)

    def test_empty_graph_renders_message(self) -> None:
        self.assertIn("graph-empty", render_graph_html(None))
        self.assertIn("graph-empty", render_graph_html(Graph()))

    def test_dangling_link_is_rejected(self) -> None:
        graph = Graph(
            nodes=[Node(id="track:1", label="t", kind="track", is_central=True)],
            links=[Link(source="track:1", target="tag:missing")],
        )
        with self.assertRaises(ValueError):
            build_network(graph)


if __name__ == "__main__":
    unittest.main()
