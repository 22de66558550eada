from __future__ import annotations

import os
import unittest
from unittest.mock import AsyncMock, patch

from cultural_dna_map.adapters import itunes_adapter, lastfm_adapter, wikipedia_adapter
from cultural_dna_map.adapters.lastfm_adapter import parse_top_tags
from cultural_dna_map.utils.io import load_config


class LastfmAdapterTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.config = load_config("configs/default.yaml")

    def test_parse_top_tags_handles_single_dict(self) -> None:
        payload = {"toptags": {"tag": {"name": "grime", "count": "100"}}}
        self.assertEqual([("grime", 100)], parse_top_tags(payload))
        self.assertEqual([], parse_top_tags({"toptags": {"tag": []}}))
        self.assertEqual([], parse_top_tags(None))

    async def test_artist_top_tags(self) -> None:
        payload = {
            "toptags": {
                "tag": [
                    {"name": "grime", "count": 100},
                    {"name": "uk rap", "count": "62"},
                    {"name": " ", "count": 5},
                    {"name": "seen live", "count": None},
                ]
            }
        }
        fake = AsyncMock(return_value=payload)
        with patch.dict(os.environ, {"LASTFM_API_KEY": "test-key"}):
            with patch("cultural_dna_map.adapters.lastfm_adapter._request_json", fake):
                tags = await lastfm_adapter.fetch_artist_top_tags("Skepta", self.config)

        self.assertEqual([("grime", 100), ("uk rap", 62), ("seen live", 0)], tags)
        params = fake.await_args.args[1]
        self.assertEqual("artist.getTopTags", params["method"])
        self.assertEqual("Skepta", params["artist"])
        self.assertEqual(1, params["autocorrect"])
        self.assertEqual("test-key", params["api_key"])

    async def test_track_top_tags_sends_both_names(self) -> None:
        fake = AsyncMock(return_value={"toptags": {"tag": [{"name": "grime", "count": 3}]}})
        with patch.dict(os.environ, {"LASTFM_API_KEY": "test-key"}):
            with patch("cultural_dna_map.adapters.lastfm_adapter._request_json", fake):
                tags = await lastfm_adapter.fetch_track_top_tags("Skepta", "Shutdown", self.config)
        self.assertEqual([("grime", 3)], tags)
        params = fake.await_args.args[1]
        self.assertEqual(("track.getTopTags", "Skepta", "Shutdown"), (params["method"], params["artist"], params["track"]))

    async def test_missing_key_skips_request(self) -> None:
        fake = AsyncMock()
        with patch.dict(os.environ, {"LASTFM_API_KEY": ""}):
            with patch("cultural_dna_map.adapters.lastfm_adapter._request_json", fake):
                self.assertEqual([], await lastfm_adapter.fetch_artist_top_tags("Skepta", self.config))
        fake.assert_not_awaited()

    async def test_error_payload_and_exceptions_degrade(self) -> None:
        with patch.dict(os.environ, {"LASTFM_API_KEY": "test-key"}):
            with patch(
                "cultural_dna_map.adapters.lastfm_adapter._request_json",
                AsyncMock(return_value={"error": 6, "message": "The artist you supplied could not be found"}),
            ):
                self.assertEqual([], await lastfm_adapter.fetch_artist_top_tags("Nobody", self.config))
            with patch(
                "cultural_dna_map.adapters.lastfm_adapter._request_json",
                AsyncMock(side_effect=TimeoutError("slow")),
            ):
                self.assertEqual([], await lastfm_adapter.fetch_track_top_tags("Skepta", "Shutdown", self.config))

    async def test_disabled_provider(self) -> None:
        config = {"providers": {"lastfm": {"enabled": False}}}
        fake = AsyncMock()
        with patch("cultural_dna_map.adapters.lastfm_adapter._request_json", fake):
            self.assertEqual([], await lastfm_adapter.fetch_artist_top_tags("Skepta", config))
        fake.assert_not_awaited()


class WikipediaAdapterTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.config = load_config("configs/default.yaml")

    async def test_category_members(self) -> None:
        payload = {
            "query": {
                "categorymembers": [
                    {"ns": 0, "title": "Trap music"},
                    {"ns": 0, "title": "Drill music"},
                    {"ns": 0, "title": ""},
                ]
            }
        }
        fake = AsyncMock(return_value=payload)
        with patch("cultural_dna_map.adapters.wikipedia_adapter._request_json", fake):
            members = await wikipedia_adapter.fetch_category_members("Category:Hip hop genres", self.config)
        self.assertEqual(["Trap music", "Drill music"], members)
        params = fake.await_args.args[1]
        self.assertEqual("Category:Hip hop genres", params["cmtitle"])
        self.assertEqual("page", params["cmtype"])

    async def test_category_error_payload(self) -> None:
        fake = AsyncMock(return_value={"error": {"code": "invalidtitle"}})
        with patch("cultural_dna_map.adapters.wikipedia_adapter._request_json", fake):
            self.assertEqual([], await wikipedia_adapter.fetch_category_members("Bad|title", self.config))
        self.assertEqual([], await wikipedia_adapter.fetch_category_members("  ", self.config))

    async def test_page_summary(self) -> None:
        payload = {
            "type": "standard",
            "title": "Grime (music genre)",
            "extract": "Grime is a genre of electronic music that emerged in London.",
            "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Grime_(music_genre)"}},
        }
        fake = AsyncMock(return_value=payload)
        with patch("cultural_dna_map.adapters.wikipedia_adapter._request_json", fake):
            summary = await wikipedia_adapter.fetch_page_summary("grime music", self.config)
        self.assertIsNotNone(summary)
        self.assertEqual("Grime (music genre)", summary.title)
        self.assertEqual("https://en.wikipedia.org/wiki/Grime_(music_genre)", summary.url)
        self.assertTrue(fake.await_args.args[0].endswith("/page/summary/grime_music"))

    async def test_page_summary_keeps_punctuation_in_title(self) -> None:
        payload = {"type": "standard", "title": "AC/DC", "extract": "AC/DC are an Australian rock band."}
        fake = AsyncMock(return_value=payload)
        with patch("cultural_dna_map.adapters.wikipedia_adapter._request_json", fake):
            summary = await wikipedia_adapter.fetch_page_summary("AC/DC", self.config)
            await wikipedia_adapter.fetch_page_summary("Drum and bass: a history", self.config)
        self.assertEqual("AC/DC", summary.title)
        urls = [call.args[0] for call in fake.await_args_list]
        self.assertTrue(urls[0].endswith("/page/summary/AC%2FDC"))
        self.assertTrue(urls[1].endswith("/page/summary/Drum_and_bass%3A_a_history"))

    async def test_page_summary_skips_disambiguation_and_empty(self) -> None:
        with patch(
            "cultural_dna_map.adapters.wikipedia_adapter._request_json",
            AsyncMock(return_value={"type": "disambiguation", "title": "Grime", "extract": "Grime may refer to:"}),
        ):
            self.assertIsNone(await wikipedia_adapter.fetch_page_summary("Grime", self.config))
        with patch(
            "cultural_dna_map.adapters.wikipedia_adapter._request_json",
            AsyncMock(return_value={"type": "standard", "title": "Empty", "extract": ""}),
        ):
            self.assertIsNone(await wikipedia_adapter.fetch_page_summary("Empty", self.config))
        with patch(
            "cultural_dna_map.adapters.wikipedia_adapter._request_json",
            AsyncMock(side_effect=RuntimeError("404")),
        ):
            self.assertIsNone(await wikipedia_adapter.fetch_page_summary("Missing", self.config))


class ItunesAdapterTests(unittest.IsolatedAsyncioTestCase):
    async def test_search_tracks(self) -> None:
        config = load_config("configs/default.yaml")
        payload = {
            "resultCount": 3,
            "results": [
                {
                    "trackId": 1064208436,
                    "trackName": "Shutdown",
                    "artistName": "Skepta",
                    "collectionName": "Konnichiwa",
                    "releaseDate": "2015-04-19T07:00:00Z",
                    "artworkUrl100": "https://is1.mzstatic.com/image/thumb/100x100bb.jpg",
                    "previewUrl": "https://audio-ssl.itunes.apple.com/shutdown.m4a",
                    "primaryGenreName": "Hip-Hop/Rap",
                },
                {"trackId": 2, "trackName": "", "artistName": "Nobody"},
                {"wrapperType": "collection"},
            ],
        }
        fake = AsyncMock(return_value=payload)
        with patch("cultural_dna_map.adapters.itunes_adapter._request_json", fake):
            tracks = await itunes_adapter.search_tracks("shutdown skepta", config)

        self.assertEqual(1, len(tracks))
        track = tracks[0]
        self.assertEqual(("1064208436", "Shutdown", "Skepta"), (track.track_id, track.name, track.artist))
        self.assertEqual("Hip-Hop/Rap", track.primary_genre)
        params = fake.await_args.args[1]
        self.assertEqual("song", params["entity"])
        self.assertEqual("shutdown skepta", params["term"])

    async def test_search_failure_is_empty(self) -> None:
        with patch("cultural_dna_map.adapters.itunes_adapter._request_json", AsyncMock(side_effect=RuntimeError("down"))):
            self.assertEqual([], await itunes_adapter.search_tracks("shutdown", {}))
        self.assertEqual([], await itunes_adapter.search_tracks("   ", {}))


if __name__ == "__main__":
    unittest.main()
