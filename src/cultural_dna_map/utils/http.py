from __future__ import annotations

from typing import Any

import httpx

DEFAULT_USER_AGENT = "cultural-dna-map/0.1 (research@localhost)"


async def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 6.0,
) -> Any:
    """GET a JSON document. Raises on transport errors and non-2xx statuses."""
    merged = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"}
    merged.update(headers or {})
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url, params=params, headers=merged)
    response.raise_for_status()
    return response.json()
