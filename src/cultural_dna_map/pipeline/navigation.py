from __future__ import annotations

import asyncio
import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

from cultural_dna_map.models.types import Graph, Node, TrackRecord
from cultural_dna_map.pipeline.graph_builder import DEFAULT_MAX_TAGS, build_genre_focus_graph, build_track_graph
from cultural_dna_map.pipeline.panel import genre_panel, summary_section, track_panel
from cultural_dna_map.pipeline.providers import Providers, collect_track_tags, default_providers
from cultural_dna_map.pipeline.summary_cache import SummaryCache
from cultural_dna_map.pipeline.taxonomy import TaxonomyResolver

logger = logging.getLogger(__name__)

IDLE = "idle"
TRACK_VIEW = "track"
GENRE_FOCUS = "genre"


class NavigationError(RuntimeError):
    pass


@dataclass(slots=True, frozen=True)
class ViewState:
    kind: str = IDLE
    name: str = ""
    track: TrackRecord | None = None
    context_track: TrackRecord | None = None
    preserve_role: bool = False


@dataclass(slots=True)
class TrackViewSnapshot:
    track: TrackRecord
    graph: Graph
    panel: dict[str, Any]
    tags: list[str] = field(default_factory=list)


@dataclass(slots=True)
class NavigationContext:
    current_track: TrackRecord | None = None
    last_track_view: TrackViewSnapshot | None = None

    def snapshot_for(self, track: TrackRecord) -> TrackViewSnapshot | None:
        snapshot = self.last_track_view
        if snapshot is None or snapshot.track != track:
            return None
        return snapshot


@dataclass(slots=True)
class ViewUpdate:
    state: ViewState
    graph: Graph
    panel: dict[str, Any]
    generation: int
    applied: bool
    source: str = "fetched"


class NavigationController:
    """Drives Idle -> TrackView <-> GenreFocus and owns the session-wide context.

    Every operation takes a fresh generation number; a result is applied only
    if no newer operation started while it was awaiting providers.
    """

    def __init__(
        self,
        providers: Providers,
        config: dict[str, Any] | None = None,
        *,
        resolver: TaxonomyResolver | None = None,
        summaries: SummaryCache | None = None,
    ) -> None:
        self.config = config or {}
        self.providers = providers
        self.resolver = resolver or TaxonomyResolver.from_config(providers.category_members, self.config)
        self.summaries = summaries or SummaryCache.from_config(providers.page_summary, self.config)
        max_tags = (self.config.get("graph") or {}).get("max_tags")
        self.max_tags = int(max_tags) if max_tags else DEFAULT_MAX_TAGS
        self.rederive_on_back = bool((self.config.get("navigation") or {}).get("rederive_on_back", False))

        self.context = NavigationContext()
        self.state = ViewState()
        self.graph: Graph | None = None
        self.panel: dict[str, Any] | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> NavigationController:
        return cls(default_providers(config), config)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def can_go_back(self) -> bool:
        return self.context.current_track is not None and self.state.kind == GENRE_FOCUS

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _apply(
        self,
        generation: int,
        state: ViewState,
        graph: Graph,
        panel: dict[str, Any],
        *,
        source: str = "fetched",
        on_apply: Callable[[], None] | None = None,
    ) -> ViewUpdate:
        with self._lock:
            if generation != self._generation:
                logger.info(
                    "Dropping stale %s view %r (generation %d, latest %d)",
                    state.kind,
                    state.name,
                    generation,
                    self._generation,
                )
                return ViewUpdate(state, graph, panel, generation, applied=False, source=source)
            self.state = state
            self.graph = graph
            self.panel = panel
            if on_apply is not None:
                on_apply()
        logger.info("View -> %s %r (%d nodes, %d links)", state.kind, state.name, len(graph.nodes), len(graph.links))
        return ViewUpdate(state, graph, panel, generation, applied=True, source=source)

    async def search(self, query: str) -> list[TrackRecord]:
        if not str(query or "").strip():
            return []
        try:
            return await self.providers.search_tracks(query)
        except Exception as exc:
            logger.warning("Track search failed for %r: %s", query, exc)
            return []

    async def select_track(self, track: TrackRecord) -> ViewUpdate:
        generation = self._begin()
        logger.info("Selecting track %s - %s", track.name, track.artist)
        tags = await collect_track_tags(track, self.providers, self.config)
        graph = build_track_graph(track, tags, max_tags=self.max_tags)
        panel = track_panel(track, tags)
        snapshot = TrackViewSnapshot(track=track, graph=graph, panel=copy.deepcopy(panel), tags=list(tags))

        def commit() -> None:
            self.context.current_track = track
            self.context.last_track_view = snapshot

        state = ViewState(kind=TRACK_VIEW, name=track.name, track=track)
        return self._apply(generation, state, graph, panel, on_apply=commit)

    async def _focus(self, name: str, *, preserve_role: bool) -> ViewUpdate | None:
        label = str(name or "").strip()
        if not label:
            return None
        generation = self._begin()
        context_track = self.context.current_track

        subgenres, summary = await asyncio.gather(self.resolver.resolve(label), self.summaries.get(label))
        graph = build_genre_focus_graph(
            label,
            subgenres,
            context_track=context_track,
            preserve_role=preserve_role,
            has_summary=summary is not None,
        )
        panel = genre_panel(label, summary)
        state = ViewState(kind=GENRE_FOCUS, name=label, context_track=context_track, preserve_role=preserve_role)
        return self._apply(generation, state, graph, panel)

    async def click_tag(self, tag: str) -> ViewUpdate | None:
        return await self._focus(tag, preserve_role=True)

    async def click_genre(self, name: str) -> ViewUpdate | None:
        return await self._focus(name, preserve_role=False)

    async def click_back(self) -> ViewUpdate:
        track = self.context.current_track
        if track is None:
            raise NavigationError("No track selected; nothing to go back to.")

        generation = self._begin()
        snapshot = self.context.snapshot_for(track)
        state = ViewState(kind=TRACK_VIEW, name=track.name, track=track)

        if snapshot is not None and not self.rederive_on_back:
            return self._apply(generation, state, snapshot.graph, copy.deepcopy(snapshot.panel), source="snapshot")

        # Same filter rules as select_track; the provider's tag list may have moved since.
        tags = await collect_track_tags(track, self.providers, self.config)
        graph = build_track_graph(track, tags, max_tags=self.max_tags)
        panel = copy.deepcopy(snapshot.panel) if snapshot is not None else track_panel(track, tags)
        return self._apply(generation, state, graph, panel, source="rederived")

    async def click_node(self, node: Node) -> ViewUpdate | None:
        if node.kind == "track":
            track = node.payload
            if track is None:
                return None
            if track == self.context.current_track and self.state.kind != TRACK_VIEW:
                return await self.click_back()
            return await self.select_track(track)
        if node.kind == "tag":
            return await self.click_tag(node.label)
        if node.kind == "genre":
            if node.is_central:
                return None
            return await self.click_genre(node.label)
        logger.debug("Ignoring click on unknown node kind %r", node.kind)
        return None

    async def hover(self, name: str) -> dict[str, Any] | None:
        label = str(name or "").strip()
        if not label:
            return None
        return summary_section(label, await self.summaries.get(label))
