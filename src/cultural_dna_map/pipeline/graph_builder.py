from __future__ import annotations

from typing import Iterable

from cultural_dna_map.models.types import Graph, Link, Node, TrackRecord
from cultural_dna_map.utils.genre import normalize_tag, slug

DEFAULT_MAX_TAGS = 12


def track_node_id(track: TrackRecord) -> str:
    if track.track_id:
        return f"track:{track.track_id}"
    return f"track:{slug(track.name)}:{slug(track.artist)}"


def tag_node_id(tag: str) -> str:
    return f"tag:{normalize_tag(tag)}"


def genre_node_id(name: str) -> str:
    return f"genre:{normalize_tag(name)}"


def track_label(track: TrackRecord) -> str:
    return f"{track.name} - {track.artist}" if track.artist else track.name


class NodeRegistry:
    """One node per id for a single build; re-adding an id returns the first instance."""

    def __init__(self) -> None:
        self._by_id: dict[str, Node] = {}
        self._links: dict[tuple[str, str], Link] = {}
        self.nodes: list[Node] = []

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._by_id

    def add(self, node: Node) -> Node:
        existing = self._by_id.get(node.id)
        if existing is not None:
            return existing
        self._by_id[node.id] = node
        self.nodes.append(node)
        return node

    def link(self, source: Node, target: Node) -> Link | None:
        if source.id == target.id:
            return None
        if source.id not in self._by_id or target.id not in self._by_id:
            raise KeyError(f"link endpoints must be registered: {source.id} -> {target.id}")
        key = (source.id, target.id)
        if key not in self._links:
            self._links[key] = Link(source=source.id, target=target.id)
        return self._links[key]

    @property
    def links(self) -> list[Link]:
        return list(self._links.values())

    def to_graph(self, title: str, *, preserve_role: bool = False) -> Graph:
        return Graph(nodes=list(self.nodes), links=self.links, title=title, preserve_role=preserve_role)


def build_track_graph(track: TrackRecord, tags: Iterable[str], *, max_tags: int = DEFAULT_MAX_TAGS) -> Graph:
    registry = NodeRegistry()
    central = registry.add(
        Node(id=track_node_id(track), label=track_label(track), kind="track", is_central=True, payload=track)
    )

    added = 0
    for raw in tags:
        if added >= max_tags:
            break
        label = normalize_tag(raw)
        if not label:
            continue
        node_id = tag_node_id(label)
        if node_id in registry:
            continue
        tag_node = registry.add(Node(id=node_id, label=label, kind="tag"))
        registry.link(central, tag_node)
        added += 1

    return registry.to_graph(f"Track: {track_label(track)}")


def build_genre_focus_graph(
    name: str,
    subgenres: Iterable[str],
    *,
    context_track: TrackRecord | None = None,
    preserve_role: bool = False,
    has_summary: bool = True,
) -> Graph:
    """Central genre with its subgenres; the central node is a placeholder when
    either the taxonomy or the summary came back empty."""
    label = str(name or "").strip()
    members = [str(item).strip() for item in subgenres if str(item).strip()]

    registry = NodeRegistry()
    context: Node | None = None
    if context_track is not None:
        context = registry.add(
            Node(
                id=track_node_id(context_track),
                label=track_label(context_track),
                kind="track",
                is_context=True,
                payload=context_track,
            )
        )

    central = registry.add(
        Node(
            id=genre_node_id(label),
            label=label,
            kind="genre",
            is_central=True,
            is_placeholder=not members or not has_summary,
        )
    )
    if context is not None:
        registry.link(context, central)

    for title in members:
        child = registry.add(Node(id=genre_node_id(title), label=title, kind="genre"))
        if child.is_central or child.is_context:
            continue
        registry.link(central, child)

    return registry.to_graph(f"Genre: {label}", preserve_role=preserve_role)
