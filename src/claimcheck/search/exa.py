"""Exa discovery using the official exa-py SDK."""

import asyncio
import logging
import os

from exa_py import AsyncExa

from claimcheck.data import DiscoveryCandidate, SearchTerms
from claimcheck.search.base import AdapterKind
from claimcheck.search.candidates import web_candidate

logger = logging.getLogger(__name__)


class ExaAdapter:
    """Discover web pages about a claim using the Exa API.

    Args:
        api_key: Exa API key (defaults to EXA_API_KEY env var).
        max_results: Max results per query (default 10).
    """

    name = "exa"
    kind = AdapterKind.SEARCH_ENGINE

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_results: int = 10,
    ) -> None:
        self._api_key = api_key or os.environ.get("EXA_API_KEY")
        if not self._api_key:
            raise ValueError("Exa API key required. Pass api_key or set EXA_API_KEY env var.")
        self._max_results = max_results
        self._client = AsyncExa(api_key=self._api_key)

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        queries = list(dict.fromkeys([terms.primary, terms.secondary]))
        results = await asyncio.gather(
            *(self._search_single(q) for q in queries), return_exceptions=True
        )

        seen_urls: set[str] = set()
        candidates: list[DiscoveryCandidate] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.warning(f"Error processing Exa query. Error: {result}")
                continue
            for candidate in result:
                if candidate.url not in seen_urls:
                    seen_urls.add(candidate.url)
                    candidates.append(candidate)
        return candidates

    async def _search_single(self, query: str) -> list[DiscoveryCandidate]:
        """Execute a single Exa search query."""
        response = await self._client.search(query, num_results=self._max_results)
        return [
            web_candidate(
                result.url,
                result.title or "",
                published_date=result.published_date,
                author=getattr(result, "author", None) or None,
            )
            for result in response.results
        ]
