from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable

from cultural_dna_map.adapters import itunes_adapter, lastfm_adapter, wikipedia_adapter
from cultural_dna_map.models.types import Summary, TrackRecord
from cultural_dna_map.pipeline.tag_filter import build_denylist, filter_tags, merge_tags

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Providers:
    search_tracks: Callable[[str], Awaitable[list[TrackRecord]]]
    artist_tags: Callable[[str], Awaitable[list[tuple[str, int]]]]
    track_tags: Callable[[str, str], Awaitable[list[tuple[str, int]]]]
    category_members: Callable[[str], Awaitable[list[str]]]
    page_summary: Callable[[str], Awaitable[Summary | None]]


def default_providers(config: dict[str, Any]) -> Providers:
    return Providers(
        search_tracks=partial(itunes_adapter.search_tracks, config=config),
        artist_tags=partial(lastfm_adapter.fetch_artist_top_tags, config=config),
        track_tags=partial(lastfm_adapter.fetch_track_top_tags, config=config),
        category_members=partial(wikipedia_adapter.fetch_category_members, config=config),
        page_summary=partial(wikipedia_adapter.fetch_page_summary, config=config),
    )


async def collect_track_tags(track: TrackRecord, providers: Providers, config: dict[str, Any]) -> list[str]:
    """Artist and track tags fetched concurrently, filtered, then merged in first-seen order."""
    cfg = config.get("tags") or {}
    limit = int(cfg.get("limit_per_source", 12))
    denylist = build_denylist(config)

    results = await asyncio.gather(
        providers.artist_tags(track.artist),
        providers.track_tags(track.artist, track.name),
        return_exceptions=True,
    )
    sources: list[list[str]] = []
    for label, result in zip(("artist", "track"), results):
        if isinstance(result, BaseException):
            logger.warning("%s tag lookup failed for %s: %s", label, track.name, result)
            sources.append([])
            continue
        sources.append(filter_tags(result, limit=limit, artist_name=track.artist, denylist=denylist))

    combined = merge_tags(*sources)
    logger.debug("Tags for %s - %s: %s", track.name, track.artist, combined)
    return combined
