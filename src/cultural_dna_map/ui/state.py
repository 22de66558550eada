from __future__ import annotations

import copy
from typing import Any, MutableMapping

from cultural_dna_map.models.types import TrackRecord
from cultural_dna_map.pipeline.navigation import NavigationController

DEFAULT_FEATURED: list[dict[str, Any]] = [
    {"track_id": None, "name": "Shutdown", "artist": "Skepta"},
    {"track_id": None, "name": "Spirit", "artist": "J Hus"},
]

# Session-scoped only; nothing here is written to disk.
DEFAULT_STATE: dict[str, Any] = {
    "search_query": "",
    "search_results": [],
    "hover_name": "",
    "hover_section": None,
    "last_error": "",
}


def featured_tracks(config: dict[str, Any]) -> list[TrackRecord]:
    raw = config.get("featured_tracks")
    entries = raw if isinstance(raw, list) and raw else DEFAULT_FEATURED
    out: list[TrackRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        track = TrackRecord.from_dict(entry)
        if track.name and track.artist:
            out.append(track)
    return out


def init_session_state(session: MutableMapping[str, Any], config: dict[str, Any]) -> NavigationController:
    for key, value in DEFAULT_STATE.items():
        if key not in session:
            session[key] = copy.deepcopy(value)
    controller = session.get("controller")
    if not isinstance(controller, NavigationController):
        controller = NavigationController.from_config(config)
        session["controller"] = controller
    return controller


def reset_session_state(session: MutableMapping[str, Any], config: dict[str, Any]) -> NavigationController:
    for key in list(DEFAULT_STATE) + ["controller"]:
        session.pop(key, None)
    return init_session_state(session, config)
