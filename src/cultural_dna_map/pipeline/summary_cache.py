from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Awaitable, Callable

from cultural_dna_map.models.types import Summary

logger = logging.getLogger(__name__)

SummaryFetcher = Callable[[str], Awaitable[Summary | None]]


def summary_titles(name: str) -> list[str]:
    raw = str(name or "").strip()
    out: list[str] = []
    for title in [f"{raw} music", raw, raw.title()]:
        if raw and title not in out:
            out.append(title)
    return out


class SummaryCache:
    """Session memo of summaries keyed by the caller's display name.

    Keys are case-sensitive and never normalized. Only successful lookups are
    stored, so a name without a page is retried on every call.
    """

    def __init__(self, fetch_summary: SummaryFetcher, max_entries: int | None = None) -> None:
        self._fetch_summary = fetch_summary
        self._max_entries = max_entries if max_entries and max_entries > 0 else None
        self._entries: OrderedDict[str, Summary] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_config(cls, fetch_summary: SummaryFetcher, config: dict[str, Any]) -> SummaryCache:
        raw = (config.get("summary_cache") or {}).get("max_entries")
        return cls(fetch_summary, int(raw) if raw else None)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def peek(self, name: str) -> Summary | None:
        with self._lock:
            return self._entries.get(name)

    async def get(self, name: str) -> Summary | None:
        if not str(name or "").strip():
            return None

        with self._lock:
            cached = self._entries.get(name)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        summary = await self._resolve(name)
        if summary is None:
            return None

        with self._lock:
            self._entries[name] = summary
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)
        return summary

    async def _resolve(self, name: str) -> Summary | None:
        for title in summary_titles(name):
            try:
                summary = await self._fetch_summary(title)
            except Exception as exc:
                logger.warning("Summary lookup %r failed: %s", title, exc)
                continue
            if summary is not None:
                return summary
        logger.info("No summary found for %r", name)
        return None

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"hits": self.hits, "misses": self.misses, "size": len(self._entries)}
