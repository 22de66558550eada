from __future__ import annotations

import logging
from typing import Any

from cultural_dna_map.models.types import TrackRecord
from cultural_dna_map.utils.http import get_json
from cultural_dna_map.utils.io import provider_config

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"


async def _request_json(url: str, params: dict[str, Any], timeout: float) -> Any:
    return await get_json(url, params=params, timeout=timeout)


async def search_tracks(query: str, config: dict[str, Any]) -> list[TrackRecord]:
    term = str(query or "").strip()
    if not term:
        return []

    cfg = provider_config(config, "itunes")
    params = {
        "term": term,
        "entity": str(cfg.get("entity", "song")),
        "limit": int(cfg.get("limit", 25)),
    }
    url = str(cfg.get("search_url", ITUNES_SEARCH_URL))
    try:
        payload = await _request_json(url, params, float(cfg.get("timeout_seconds", 6)))
    except Exception as exc:
        logger.warning("iTunes search failed for %r: %s", term, exc)
        return []

    results = payload.get("results", []) if isinstance(payload, dict) else []
    if not isinstance(results, list):
        return []

    tracks: list[TrackRecord] = []
    for item in results:
        if not isinstance(item, dict):
            continue
        track = TrackRecord.from_itunes(item)
        if not track.name or not track.artist:
            continue
        tracks.append(track)
    logger.debug("iTunes search %r -> %d tracks", term, len(tracks))
    return tracks
