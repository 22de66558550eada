from __future__ import annotations

import datetime as dt
from typing import Any

from cultural_dna_map.models.types import Summary, TrackRecord

PANEL_TAG_COUNT = 8


def _section(label: str, main: str, url: str | None = None) -> dict[str, Any]:
    section: dict[str, Any] = {"label": label, "main": main}
    if url:
        section["url"] = url
    return section


def release_year(value: str) -> str:
    text = str(value or "").strip()
    if not text:
        return "—"
    try:
        return str(dt.datetime.fromisoformat(text.replace("Z", "+00:00")).year)
    except ValueError:
        head = text[:4]
        return head if head.isdigit() else "—"


def large_artwork(url: str) -> str:
    return url.replace("100x100", "500x500") if url else ""


def track_panel(track: TrackRecord, tags: list[str]) -> dict[str, Any]:
    artist = track.artist or "Unknown artist"
    album = track.album or "Unknown album"
    sections = [
        _section("Artist", artist),
        _section("Album / Year", f"{album} ({release_year(track.release_date)})"),
        _section("iTunes Genre", track.primary_genre or "—"),
    ]
    art = large_artwork(track.artwork_url)
    if art:
        sections.append(_section("Artwork", track.name, art))
    if track.preview_url:
        sections.append(_section("Preview", "Audio preview", track.preview_url))
    else:
        sections.append(_section("Preview", "No preview available for this track."))
    sections.append(
        _section("Last.fm tags", ", ".join(tags[:PANEL_TAG_COUNT]) if tags else "No tags found.")
    )
    return {"title": track.name, "kind": "track", "sections": sections}


def summary_section(name: str, summary: Summary | None) -> dict[str, Any]:
    if summary is None:
        return _section(name, "No summary found.")
    return _section(summary.title or name, summary.extract or "No summary found.", summary.url)


def genre_panel(name: str, summary: Summary | None) -> dict[str, Any]:
    if summary is None:
        return {"title": name, "kind": "genre", "sections": [_section(name, "No summary found.")]}
    sections = [_section(summary.title or name, summary.extract or "No summary found.")]
    if summary.url:
        sections.append(_section("Read more on Wikipedia", summary.url, summary.url))
    return {"title": name, "kind": "genre", "sections": sections}
