from __future__ import annotations

import unittest
from unittest.mock import AsyncMock

from cultural_dna_map.models.types import Summary
from cultural_dna_map.pipeline.summary_cache import SummaryCache, summary_titles

GRIME = Summary(title="Grime (music genre)", extract="Grime is a genre of electronic music.", url="https://en.wikipedia.org/wiki/Grime_(music_genre)")


class SummaryCacheTests(unittest.IsolatedAsyncioTestCase):
    def test_title_candidates(self) -> None:
        self.assertEqual(["uk rap music", "uk rap", "Uk Rap"], summary_titles("uk rap"))
        self.assertEqual(["Jazz music", "Jazz"], summary_titles("Jazz"))
        self.assertEqual([], summary_titles(" "))

    async def test_first_success_is_written_through(self) -> None:
        fetch = AsyncMock(side_effect=lambda title: GRIME if title == "grime music" else None)
        cache = SummaryCache(fetch)

        self.assertEqual(GRIME, await cache.get("grime"))
        self.assertEqual(GRIME, await cache.get("grime"))
        self.assertEqual(1, fetch.await_count)
        self.assertEqual({"hits": 1, "misses": 1, "size": 1}, cache.stats())
        self.assertEqual(GRIME, cache.peek("grime"))
        self.assertIsNone(cache.peek("Grime"))

    async def test_keys_are_case_sensitive(self) -> None:
        fetch = AsyncMock(return_value=GRIME)
        cache = SummaryCache(fetch)
        await cache.get("Grime")
        await cache.get("grime")
        self.assertEqual(2, fetch.await_count)
        self.assertIn("Grime", cache)
        self.assertIn("grime", cache)

    async def test_failures_are_not_cached(self) -> None:
        fetch = AsyncMock(return_value=None)
        cache = SummaryCache(fetch)
        self.assertIsNone(await cache.get("nonexistent genre"))
        self.assertIsNone(await cache.get("nonexistent genre"))
        self.assertEqual(2 * len(summary_titles("nonexistent genre")), fetch.await_count)
        self.assertEqual(0, len(cache))

    async def test_fetch_errors_are_absorbed(self) -> None:
        calls: list[str] = []

        async def flaky(title: str) -> Summary | None:
            calls.append(title)
            if title == "jazz music":
                raise RuntimeError("timeout")
            return Summary(title="Jazz", extract="Jazz is a music genre.")

        cache = SummaryCache(flaky)
        summary = await cache.get("jazz")
        self.assertEqual("Jazz", summary.title)
        self.assertEqual(["jazz music", "jazz"], calls)

    async def test_optional_bound_evicts_oldest(self) -> None:
        cache = SummaryCache.from_config(AsyncMock(return_value=GRIME), {"summary_cache": {"max_entries": 2}})
        for name in ["a", "b", "c"]:
            await cache.get(name)
        self.assertNotIn("a", cache)
        self.assertIn("c", cache)
        self.assertEqual(2, len(cache))

    async def test_unbounded_by_default(self) -> None:
        cache = SummaryCache.from_config(AsyncMock(return_value=GRIME), {"summary_cache": {"max_entries": None}})
        for idx in range(50):
            await cache.get(f"genre {idx}")
        self.assertEqual(50, len(cache))


if __name__ == "__main__":
    unittest.main()
