from __future__ import annotations

import html

from pyvis.network import Network

from cultural_dna_map.models.types import Graph, Node
from cultural_dna_map.ui.styles import NODE_SIZES, PALETTE

PHYSICS_OPTIONS = """
var options = {
  "interaction": {"hover": true, "dragNodes": true},
  "edges": {"color": {"color": "#444444"}, "width": 1, "smooth": false},
  "physics": {
    "solver": "forceAtlas2Based",
    "forceAtlas2Based": {
      "gravitationalConstant": -60,
      "centralGravity": 0.01,
      "springLength": 120,
      "springConstant": 0.08
    },
    "minVelocity": 0.75
  }
}
"""


def node_size_hint(node: Node) -> int:
    if node.is_central:
        return NODE_SIZES["central"]
    if node.is_context:
        return NODE_SIZES["context"]
    return NODE_SIZES.get(node.kind, NODE_SIZES["genre"])


def node_color_hint(node: Node, preserve_role: bool = False) -> str:
    if node.is_placeholder:
        return PALETTE["placeholder"]
    if node.is_central:
        # A tag opened as a genre keeps its tag color.
        return PALETTE["tag"] if preserve_role else PALETTE["central"]
    if node.is_context:
        return PALETTE["context"]
    return PALETTE.get(node.kind, PALETTE["genre"])


def empty_graph_html(message: str = "No genre data available.") -> str:
    return f"<div class='graph-empty'>{html.escape(message)}</div>"


def build_network(graph: Graph, *, height: str = "520px") -> Network:
    net = Network(
        height=height,
        width="100%",
        directed=True,
        cdn_resources="remote",
        bgcolor=PALETTE["background"],
        font_color=PALETTE["text"],
    )
    net.set_options(PHYSICS_OPTIONS)

    known: set[str] = set()
    for node in graph.nodes:
        known.add(node.id)
        options: dict[str, object] = {
            "label": node.label,
            "title": f"{node.kind}: {node.label}",
            "color": node_color_hint(node, graph.preserve_role),
            "size": node_size_hint(node),
            "shape": "dot",
            "borderWidth": 1.2,
        }
        if node.is_placeholder:
            options["shapeProperties"] = {"borderDashes": [4, 4]}
        if node.is_context:
            options["opacity"] = 0.55
        net.add_node(node.id, **options)

    for link in graph.links:
        if link.source not in known or link.target not in known:
            raise ValueError(f"Link references unknown node: {link.source} -> {link.target}")
        net.add_edge(link.source, link.target)
    return net


def render_graph_html(graph: Graph | None, *, height: str = "520px") -> str:
    """Full HTML document for the graph, rebuilt from scratch on each call."""
    if graph is None or not graph.nodes:
        return empty_graph_html()
    return build_network(graph, height=height).generate_html()
