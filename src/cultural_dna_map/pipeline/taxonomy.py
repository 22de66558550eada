from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from cultural_dna_map.utils.genre import capitalize_first, hyphen_variants, normalize_tag

logger = logging.getLogger(__name__)

CategoryFetcher = Callable[[str], Awaitable[list[str]]]

# Colloquial spellings -> Wikipedia category names.
GENRE_CATEGORY_ALIASES: dict[str, str] = {
    "hip hop": "Hip hop genres",
    "hiphop": "Hip hop genres",
    "rap": "Hip hop genres",
    "rock": "Rock music genres",
    "alt rock": "Alternative rock genres",
    "alternative": "Alternative rock genres",
    "alternative rock": "Alternative rock genres",
    "house": "House music genres",
    "electronic": "Electronic music genres",
    "electronica": "Electronic music genres",
    "edm": "Electronic dance music genres",
    "dance": "Electronic dance music genres",
    "reggae": "Reggae genres",
    "jazz": "Jazz genres",
    "blues": "Blues genres",
    "pop": "Pop music genres",
    "metal": "Heavy metal genres",
    "heavy metal": "Heavy metal genres",
    "punk": "Punk rock genres",
    "punk rock": "Punk rock genres",
    "folk": "Folk music genres",
    "country": "Country music genres",
    "rnb": "Rhythm and blues music genres",
    "r&b": "Rhythm and blues music genres",
    "soul": "Soul music genres",
}

VARIANT_PATTERNS: tuple[str, ...] = ("{name} genres",)
SUFFIX_PATTERNS: tuple[str, ...] = ("{name} music genres", "{name} subgenres")


def _alias_keys(name: str) -> list[str]:
    normalized = normalize_tag(name)
    keys: list[str] = []
    for value in [normalized, normalized.replace("-", " "), normalized.replace(" ", "-")]:
        if value and value not in keys:
            keys.append(value)
    return keys


class TaxonomyResolver:
    """Best-effort subgenre lookup that walks an ordered table of category spellings."""

    def __init__(self, fetch_members: CategoryFetcher, aliases: dict[str, str] | None = None) -> None:
        self._fetch_members = fetch_members
        self.aliases = dict(GENRE_CATEGORY_ALIASES)
        for key, value in (aliases or {}).items():
            if normalize_tag(key) and str(value).strip():
                self.aliases[normalize_tag(key)] = str(value).strip()

    @classmethod
    def from_config(cls, fetch_members: CategoryFetcher, config: dict[str, Any]) -> TaxonomyResolver:
        aliases = (config.get("taxonomy") or {}).get("aliases") or {}
        return cls(fetch_members, aliases if isinstance(aliases, dict) else {})

    def candidate_keys(self, name: str) -> list[str]:
        raw = str(name or "").strip()
        if not raw:
            return []

        candidates: list[str] = []

        def push(value: str) -> None:
            value = capitalize_first(value.strip())
            if value and value not in candidates:
                candidates.append(value)

        for key in _alias_keys(raw):
            if key in self.aliases:
                push(self.aliases[key])
        # Hyphen variants are only tried as "<variant> genres"; a bare topic
        # category such as "Hip hop" lists articles rather than subgenres.
        for variant in hyphen_variants(raw):
            for pattern in VARIANT_PATTERNS:
                push(pattern.format(name=variant))
        for pattern in SUFFIX_PATTERNS:
            push(pattern.format(name=raw))
        return candidates

    async def resolve(self, name: str) -> list[str]:
        for key in self.candidate_keys(name):
            try:
                members = await self._fetch_members(key)
            except Exception as exc:
                logger.warning("Category lookup %r failed: %s", key, exc)
                continue
            if members:
                logger.debug("Resolved %r via %r (%d members)", name, key, len(members))
                return members
        logger.info("No taxonomy entry for %r", name)
        return []
