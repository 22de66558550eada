from __future__ import annotations

import re
from typing import Any, Iterable

from cultural_dna_map.utils.genre import normalize_tag, overlaps_artist

DECADE_RE = re.compile(r"^'?(\d{2}|\d{4})s$")

DENYLIST_GROUPS: dict[str, set[str]] = {
    "attendance": {
        "seen live",
        "seen in concert",
        "concert",
        "live",
        "under 2000 listeners",
        "under 100 listeners",
    },
    "personal": {
        "favorites",
        "favourites",
        "favorite",
        "favourite",
        "love",
        "awesome",
        "my music",
    },
    "location": {
        "uk",
        "british",
        "england",
        "english",
        "london",
        "usa",
        "us",
        "american",
        "canadian",
        "canada",
        "french",
        "german",
        "nigerian",
        "new york",
        "los angeles",
        "atlanta",
    },
    "vocals": {
        "male vocalists",
        "male vocalist",
        "female vocalists",
        "female vocalist",
    },
    "format": {
        "remix",
        "remixes",
        "soundtrack",
        "cover",
        "covers",
        "single",
        "albums i own",
    },
}

DENYLIST: frozenset[str] = frozenset(tag for group in DENYLIST_GROUPS.values() for tag in group)


def build_denylist(config: dict[str, Any] | None = None) -> frozenset[str]:
    extra = ((config or {}).get("tags") or {}).get("extra_denylist") or []
    if not isinstance(extra, list) or not extra:
        return DENYLIST
    return DENYLIST | {normalize_tag(item) for item in extra if normalize_tag(item)}


def is_noise_tag(tag: str, denylist: frozenset[str] = DENYLIST) -> bool:
    return tag in denylist or bool(DECADE_RE.match(tag))


def _count(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def filter_tags(
    raw_tags: Iterable[tuple[str, Any]],
    *,
    limit: int,
    artist_name: str = "",
    denylist: frozenset[str] = DENYLIST,
) -> list[str]:
    """Top ``limit`` tags by count, normalized, with noise and the artist's own name removed."""
    ranked = sorted(list(raw_tags), key=lambda item: _count(item[1]), reverse=True)[: max(0, limit)]

    out: list[str] = []
    for name, _ in ranked:
        tag = normalize_tag(name)
        if not tag or tag in out:
            continue
        if is_noise_tag(tag, denylist):
            continue
        if overlaps_artist(tag, artist_name):
            continue
        out.append(tag)
    return out


def merge_tags(*sources: Iterable[str]) -> list[str]:
    merged: list[str] = []
    seen: set[str] = set()
    for source in sources:
        for tag in source:
            if tag in seen:
                continue
            seen.add(tag)
            merged.append(tag)
    return merged
