import logging
import os

import httpx

from claimcheck.data import DiscoveryCandidate, SearchTerms, SourceType
from claimcheck.search.base import AdapterKind
from claimcheck.search.candidates import web_candidate

GNEWS_API_URL = "https://gnews.io/api/v4/search"

logger = logging.getLogger(__name__)


class GNewsAdapter:
    """Discover news articles about a claim using the GNews API.

    Args:
        api_key: GNews API key (defaults to GNEWS_API_KEY env var).
        lang: Language code for results (default: "en").
        max_results: Maximum articles per request (GNews max is 100).
        timeout: Per-request timeout in seconds.
    """

    name = "gnews"
    kind = AdapterKind.NEWS

    def __init__(
        self,
        *,
        api_key: str | None = None,
        lang: str = "en",
        max_results: int = 10,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("GNEWS_API_KEY")
        if not self._api_key:
            raise ValueError("GNews API key required. Pass api_key or set GNEWS_API_KEY env var.")
        self._lang = lang
        self._max_results = max_results
        self._timeout = timeout

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        params: dict[str, str | int] = {
            "q": terms.keyword_query(3),
            "lang": self._lang,
            "max": min(self._max_results, 100),
            "apikey": self._api_key,  # type: ignore[dict-item]
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(GNEWS_API_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error in GNews discovery. Error: {e}")
            return []

        candidates: list[DiscoveryCandidate] = []
        for item in data.get("articles", []):
            url = item.get("url", "")
            if not url:
                continue
            candidates.append(
                web_candidate(
                    url,
                    item.get("title", ""),
                    item.get("description") or "",
                    source_name=item.get("source", {}).get("name") or None,
                    source_type=SourceType.NEWS,
                    published_date=item.get("publishedAt"),
                )
            )
        return candidates
