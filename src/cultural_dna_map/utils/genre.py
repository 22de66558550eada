from __future__ import annotations

import re

SLUG_RE = re.compile(r"[^a-z0-9]+")
SPACE_RE = re.compile(r"\s+")
TOKEN_RE = re.compile(r"[\w&']+")


def slug(text: str) -> str:
    value = SLUG_RE.sub("-", str(text or "").lower()).strip("-")
    return value or "unknown"


def normalize_tag(name: str) -> str:
    return SPACE_RE.sub(" ", str(name or "").strip().lower())


def hyphen_variants(name: str) -> list[str]:
    """Raw spelling first, then the space and hyphen swapped forms."""
    raw = str(name or "").strip()
    out: list[str] = []
    for value in [raw, raw.replace("-", " "), raw.replace(" ", "-")]:
        value = SPACE_RE.sub(" ", value).strip()
        if value and value not in out:
            out.append(value)
    return out


def _tokens(text: str) -> list[str]:
    return TOKEN_RE.findall(normalize_tag(text))


def _contains_run(words: list[str], run: list[str]) -> bool:
    size = len(run)
    return any(words[idx : idx + size] == run for idx in range(len(words) - size + 1))


def overlaps_artist(tag: str, artist_name: str) -> bool:
    """Whole-word match in either direction, so "low" does not catch "slowcore"."""
    artist = _tokens(artist_name)
    words = _tokens(tag)
    if not artist or not words:
        return False
    return _contains_run(words, artist) or _contains_run(artist, words)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text
