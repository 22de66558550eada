from __future__ import annotations

import logging
import urllib.parse
from typing import Any

from cultural_dna_map.models.types import Summary
from cultural_dna_map.utils.http import get_json
from cultural_dna_map.utils.io import provider_config

logger = logging.getLogger(__name__)

WIKI_API_URL = "https://en.wikipedia.org/w/api.php"
WIKI_REST_URL = "https://en.wikipedia.org/api/rest_v1"


def _sanitize_title(title: str) -> str:
    # Only spaces change; the caller percent-encodes everything else.
    return "_".join(title.split())


async def _request_json(url: str, params: dict[str, Any] | None, timeout: float) -> Any:
    return await get_json(url, params=params, timeout=timeout)


async def fetch_category_members(category: str, config: dict[str, Any]) -> list[str]:
    """Page titles in ``Category:<category>``; [] on any failure."""
    key = str(category or "").strip()
    if key.lower().startswith("category:"):
        key = key[len("category:") :].strip()
    if not key:
        return []

    cfg = provider_config(config, "wikipedia")
    params = {
        "action": "query",
        "list": "categorymembers",
        "cmtitle": f"Category:{key}",
        "cmtype": "page",
        "cmlimit": str(int(cfg.get("category_limit", 24))),
        "format": "json",
    }
    try:
        payload = await _request_json(str(cfg.get("api_url", WIKI_API_URL)), params, float(cfg.get("timeout_seconds", 6)))
    except Exception as exc:
        logger.warning("Wikipedia categorymembers failed for %r: %s", key, exc)
        return []

    if not isinstance(payload, dict):
        return []
    if payload.get("error"):
        logger.warning("Wikipedia categorymembers error for %r: %s", key, payload.get("error"))
        return []
    members = (payload.get("query") or {}).get("categorymembers") or []
    if not isinstance(members, list):
        return []

    titles: list[str] = []
    for member in members:
        if not isinstance(member, dict):
            continue
        title = str(member.get("title", "") or "").strip()
        if title:
            titles.append(title)
    return titles


async def fetch_page_summary(title: str, config: dict[str, Any]) -> Summary | None:
    safe = urllib.parse.quote(_sanitize_title(str(title or "")), safe="")
    if not safe:
        return None

    cfg = provider_config(config, "wikipedia")
    url = f"{str(cfg.get('rest_url', WIKI_REST_URL)).rstrip('/')}/page/summary/{safe}"
    try:
        payload = await _request_json(url, None, float(cfg.get("timeout_seconds", 6)))
    except Exception as exc:
        logger.debug("Wikipedia summary failed for %r: %s", title, exc)
        return None

    if not isinstance(payload, dict):
        return None
    if str(payload.get("type", "")) == "disambiguation":
        logger.debug("Wikipedia summary for %r is a disambiguation page", title)
        return None
    extract = str(payload.get("extract", "") or "").strip()
    if not extract:
        return None

    urls = payload.get("content_urls") or {}
    page_url = None
    if isinstance(urls, dict):
        page_url = (urls.get("desktop") or {}).get("page") or (urls.get("mobile") or {}).get("page")
    return Summary(
        title=str(payload.get("title", "") or title).strip(),
        extract=extract,
        url=str(page_url) if page_url else None,
    )
