"""X/Twitter discovery using the official API v2."""

import asyncio
import logging
import os
from typing import Any

import httpx

from claimcheck.data import DiscoveryCandidate, Engagement, SearchTerms, SourceType
from claimcheck.search.base import AdapterKind

X_API_URL = "https://api.twitter.com/2/tweets/search/recent"

logger = logging.getLogger(__name__)


class XAdapter:
    """Discover recent posts about a claim with the X API v2.

    Uses the ``tweets/search/recent`` endpoint, which returns posts from the
    last 7 days with real public metrics. Requires a bearer token with at
    least Basic access.

    Args:
        bearer_token: X API bearer token (defaults to TWITTER_BEARER_TOKEN env var).
        max_results: Max results per query (10-100, default 10).
        timeout: Per-request timeout in seconds.
    """

    name = "x"
    kind = AdapterKind.SOCIAL

    def __init__(
        self,
        *,
        bearer_token: str | None = None,
        max_results: int = 10,
        timeout: float = 30.0,
    ) -> None:
        self._bearer_token = bearer_token or os.environ.get("TWITTER_BEARER_TOKEN")
        if not self._bearer_token:
            raise ValueError(
                "X API bearer token required. "
                "Pass bearer_token or set TWITTER_BEARER_TOKEN env var."
            )
        self._max_results = max_results
        self._timeout = timeout

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        """Search recent posts for the claim's keyword query and primary variation.

        Args:
            terms: Claim search terms.

        Returns:
            Deduplicated post candidates with engagement metrics.
        """
        queries = list(dict.fromkeys([terms.keyword_query(3), terms.primary]))
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            tasks = [self._search_single(client, query) for query in queries]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        seen_urls: set[str] = set()
        candidates: list[DiscoveryCandidate] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.warning(f"Error processing X query. Error: {result}")
                continue
            for candidate in result:
                if candidate.url not in seen_urls:
                    seen_urls.add(candidate.url)
                    candidates.append(candidate)
        return candidates

    async def _search_single(
        self,
        client: httpx.AsyncClient,
        query: str,
    ) -> list[DiscoveryCandidate]:
        """Execute a single X API search query."""
        params: dict[str, str | int] = {
            # Retweets duplicate the original post's text.
            "query": f"{query} -is:retweet",
            "max_results": min(max(self._max_results, 10), 100),
            "tweet.fields": "created_at,public_metrics,author_id",
            "expansions": "author_id",
            "user.fields": "username,name,verified",
        }
        headers = {"Authorization": f"Bearer {self._bearer_token}"}
        response = await client.get(X_API_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()

        # Build author lookup from includes
        authors: dict[str, dict[str, Any]] = {}
        for user in data.get("includes", {}).get("users", []):
            authors[user["id"]] = user

        candidates: list[DiscoveryCandidate] = []
        for item in data.get("data", []):
            author = authors.get(item.get("author_id", ""), {})
            handle = author.get("username", "")
            metrics = item.get("public_metrics", {})
            text = item.get("text", "")
            candidates.append(
                DiscoveryCandidate(
                    url=f"https://x.com/{handle}/status/{item['id']}",
                    title=text[:100],
                    description=text,
                    source_name="X",
                    source_type=SourceType.SOCIAL_MEDIA,
                    provisional_credibility=5,
                    published_date=item.get("created_at"),
                    author=f"@{handle}" if handle else None,
                    platform="Twitter",
                    verified=bool(author.get("verified", False)),
                    engagement=Engagement(
                        likes=metrics.get("like_count", 0),
                        shares=metrics.get("retweet_count", 0),
                        comments=metrics.get("reply_count", 0),
                        views=metrics.get("impression_count", 0),
                    ),
                )
            )
        return candidates
