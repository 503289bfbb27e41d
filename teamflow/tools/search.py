"""Web lookup tool using the DuckDuckGo instant-answer API."""

from __future__ import annotations

import httpx

from .base import BaseTool


DUCKDUCKGO_API = "https://api.duckduckgo.com/"
SEARCH_TIMEOUT = 15.0


class SearchTool(BaseTool):
    name = "search"
    description = "Looks up a short factual answer for a query."

    def __init__(self, *, timeout: float = SEARCH_TIMEOUT, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.timeout = timeout
        self._transport = transport

    async def call(self, args: str) -> str:
        query = args.strip()
        if not query:
            return "Search error: empty query"

        params = {"q": query, "format": "json", "no_redirect": "1", "no_html": "1"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(DUCKDUCKGO_API, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            return f"Search error: request failed: {exc}"
        except ValueError as exc:
            return f"Search error: invalid JSON: {exc}"

        abstract = str(data.get("AbstractText") or "").strip()
        if abstract:
            return abstract

        for topic in data.get("RelatedTopics") or []:
            text = topic.get("Text") if isinstance(topic, dict) else None
            if text:
                return f"Related: {text}"

        return "No relevant result found."
