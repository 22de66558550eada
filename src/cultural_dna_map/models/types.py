from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class TrackRecord:
    name: str
    artist: str
    track_id: str | None = None
    album: str = ""
    release_date: str = ""
    artwork_url: str = ""
    preview_url: str = ""
    primary_genre: str = ""

    @classmethod
    def from_itunes(cls, payload: dict[str, Any]) -> TrackRecord:
        raw_id = payload.get("trackId")
        return cls(
            name=str(payload.get("trackName", "") or "").strip(),
            artist=str(payload.get("artistName", "") or "").strip(),
            track_id=str(raw_id) if raw_id not in (None, "") else None,
            album=str(payload.get("collectionName", "") or "").strip(),
            release_date=str(payload.get("releaseDate", "") or "").strip(),
            artwork_url=str(payload.get("artworkUrl100", "") or "").strip(),
            preview_url=str(payload.get("previewUrl", "") or "").strip(),
            primary_genre=str(payload.get("primaryGenreName", "") or "").strip(),
        )

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> TrackRecord:
        raw_id = payload.get("track_id")
        return cls(
            name=str(payload.get("name", "") or "").strip(),
            artist=str(payload.get("artist", "") or "").strip(),
            track_id=str(raw_id) if raw_id not in (None, "") else None,
            album=str(payload.get("album", "") or ""),
            release_date=str(payload.get("release_date", "") or ""),
            artwork_url=str(payload.get("artwork_url", "") or ""),
            preview_url=str(payload.get("preview_url", "") or ""),
            primary_genre=str(payload.get("primary_genre", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "track_id": self.track_id,
            "name": self.name,
            "artist": self.artist,
            "album": self.album,
            "release_date": self.release_date,
            "artwork_url": self.artwork_url,
            "preview_url": self.preview_url,
            "primary_genre": self.primary_genre,
        }


@dataclass(slots=True)
class Node:
    id: str
    label: str
    kind: str
    is_central: bool = False
    is_context: bool = False
    is_placeholder: bool = False
    payload: TrackRecord | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "kind": self.kind,
            "is_central": self.is_central,
            "is_context": self.is_context,
            "is_placeholder": self.is_placeholder,
            "payload": self.payload.to_dict() if self.payload is not None else None,
        }


@dataclass(slots=True, frozen=True)
class Link:
    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}


@dataclass(slots=True)
class Graph:
    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    title: str = ""
    preserve_role: bool = False

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def central(self) -> Node | None:
        for node in self.nodes:
            if node.is_central:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "preserve_role": self.preserve_role,
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }


@dataclass(slots=True, frozen=True)
class Summary:
    title: str
    extract: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "extract": self.extract, "url": self.url}
