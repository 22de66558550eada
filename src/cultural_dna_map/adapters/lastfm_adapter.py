from __future__ import annotations

import logging
import os
from typing import Any

from cultural_dna_map.utils.http import get_json
from cultural_dna_map.utils.io import provider_config

logger = logging.getLogger(__name__)

LASTFM_BASE = "https://ws.audioscrobbler.com/2.0/"


async def _request_json(url: str, params: dict[str, Any], timeout: float) -> Any:
    return await get_json(url, params=params, timeout=timeout)


def _parse_count(value: Any) -> int:
    try:
        return int(float(value or 0))
    except (TypeError, ValueError):
        return 0


def parse_top_tags(payload: Any) -> list[tuple[str, int]]:
    """Extract (tag, count) pairs from a toptags payload; malformed shapes give []."""
    if not isinstance(payload, dict):
        return []
    toptags = payload.get("toptags")
    if not isinstance(toptags, dict):
        return []
    raw_tags = toptags.get("tag") or []
    if isinstance(raw_tags, dict):
        raw_tags = [raw_tags]
    if not isinstance(raw_tags, list):
        return []

    out: list[tuple[str, int]] = []
    for tag in raw_tags:
        if not isinstance(tag, dict):
            continue
        name = str(tag.get("name", "") or "")
        if not name.strip():
            continue
        out.append((name, _parse_count(tag.get("count"))))
    return out


async def _top_tags(method: str, params: dict[str, Any], config: dict[str, Any]) -> list[tuple[str, int]]:
    cfg = provider_config(config, "lastfm")
    if not bool(cfg.get("enabled", True)):
        return []

    api_key_env = str(cfg.get("api_key_env", "LASTFM_API_KEY"))
    api_key = os.getenv(api_key_env, "")
    if not api_key:
        logger.warning("Last.fm %s skipped: missing API key in $%s", method, api_key_env)
        return []

    query = {"method": method, **params, "api_key": api_key, "format": "json", "autocorrect": 1}
    url = str(cfg.get("base_url", LASTFM_BASE))
    try:
        payload = await _request_json(url, query, float(cfg.get("timeout_seconds", 6)))
    except Exception as exc:
        logger.warning("Last.fm %s request failed: %s", method, exc)
        return []

    if isinstance(payload, dict) and payload.get("error"):
        logger.warning("Last.fm %s returned error: %s", method, payload.get("message") or payload.get("error"))
        return []

    tags = parse_top_tags(payload)
    if not tags:
        logger.debug("Last.fm %s returned no tags for %s", method, params)
    return tags


async def fetch_artist_top_tags(artist_name: str, config: dict[str, Any]) -> list[tuple[str, int]]:
    artist = str(artist_name or "").strip()
    if not artist:
        return []
    return await _top_tags("artist.getTopTags", {"artist": artist}, config)


async def fetch_track_top_tags(artist_name: str, track_name: str, config: dict[str, Any]) -> list[tuple[str, int]]:
    artist = str(artist_name or "").strip()
    track = str(track_name or "").strip()
    if not artist or not track:
        return []
    return await _top_tags("track.getTopTags", {"artist": artist, "track": track}, config)
