from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from cultural_dna_map.pipeline.navigation import NavigationController, ViewUpdate
from cultural_dna_map.utils.io import load_config, write_json


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=True))


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="configs/default.yaml",
        help="Path to YAML/JSON config file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def _configure_logging(config: dict[str, Any], verbose: bool) -> None:
    level_name = str((config.get("logging") or {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _view_payload(update: ViewUpdate | None) -> dict[str, Any]:
    if update is None:
        return {"applied": False, "reason": "nothing to show"}
    return {
        "applied": update.applied,
        "state": update.state.kind,
        "name": update.state.name,
        "source": update.source,
        "graph": update.graph.to_dict(),
        "panel": update.panel,
    }


async def _track_view(controller: NavigationController, query: str, index: int) -> dict[str, Any]:
    tracks = await controller.search(query)
    if not tracks:
        return {"applied": False, "reason": f"no tracks found for {query!r}"}
    track = tracks[min(max(index, 0), len(tracks) - 1)]
    return _view_payload(await controller.select_track(track))


async def _genre_view(controller: NavigationController, name: str, track_query: str | None) -> dict[str, Any]:
    if track_query:
        tracks = await controller.search(track_query)
        if tracks:
            await controller.select_track(tracks[0])
    return _view_payload(await controller.click_genre(name))


async def _subgenres(controller: NavigationController, name: str) -> dict[str, Any]:
    return {
        "name": name,
        "candidates": controller.resolver.candidate_keys(name),
        "subgenres": await controller.resolver.resolve(name),
    }


async def _summary(controller: NavigationController, name: str) -> dict[str, Any]:
    summary = await controller.summaries.get(name)
    return {"name": name, "summary": summary.to_dict() if summary else None}


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="dna",
        description="Cultural DNA Map CLI",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search tracks")
    _add_common_args(search)
    search.add_argument("query")

    track = subparsers.add_parser("track", help="Build the track view for a search result")
    _add_common_args(track)
    track.add_argument("query")
    track.add_argument("--index", type=int, default=0, help="Which search result to use")
    track.add_argument("--out", default=None, help="Also write the view JSON to this path")

    genre = subparsers.add_parser("genre", help="Build the genre-focus view")
    _add_common_args(genre)
    genre.add_argument("name")
    genre.add_argument("--track-query", default=None, help="Select this track first and carry it as context")
    genre.add_argument("--out", default=None, help="Also write the view JSON to this path")

    subgenres = subparsers.add_parser("subgenres", help="Resolve subgenres for a genre or tag")
    _add_common_args(subgenres)
    subgenres.add_argument("name")

    summary = subparsers.add_parser("summary", help="Look up a Wikipedia summary")
    _add_common_args(summary)
    summary.add_argument("name")

    args = parser.parse_args()
    config = load_config(args.config)
    _configure_logging(config, args.verbose)
    controller = NavigationController.from_config(config)

    if args.command == "search":
        tracks = asyncio.run(controller.search(args.query))
        _print([item.to_dict() for item in tracks])
        return

    if args.command == "track":
        payload = asyncio.run(_track_view(controller, args.query, args.index))
        if args.out:
            write_json(Path(args.out), payload)
        _print(payload)
        return

    if args.command == "genre":
        payload = asyncio.run(_genre_view(controller, args.name, args.track_query))
        if args.out:
            write_json(Path(args.out), payload)
        _print(payload)
        return

    if args.command == "subgenres":
        _print(asyncio.run(_subgenres(controller, args.name)))
        return

    if args.command == "summary":
        _print(asyncio.run(_summary(controller, args.name)))
        return

    parser.error("Unsupported command")


if __name__ == "__main__":
    main()
