import logging
import os

import anthropic
from anthropic.types import WebSearchResultBlock

from claimcheck.data import DiscoveryCandidate, SearchTerms
from claimcheck.search.base import AdapterKind
from claimcheck.search.candidates import web_candidate

logger = logging.getLogger(__name__)


class ClaudeSearchAdapter:
    """Discover sources using Claude's built-in web search tool.

    This uses Anthropic's server-side web search, so you only need your
    existing Claude API key - no separate search API required.

    Note: Web search must be enabled in your Anthropic Console settings.

    Args:
        api_key: Anthropic API key (defaults to CLAUDE_API_KEY env var).
        model: Model to use for search (default: claude-haiku-4-5-20251001).
        max_searches: Max web searches per discovery (default: 2).
        max_results: Maximum candidates returned.
    """

    name = "claude"
    kind = AdapterKind.SEARCH_ENGINE

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "claude-haiku-4-5-20251001",
        max_searches: int = 2,
        max_results: int = 10,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_searches = max_searches
        self._max_results = max_results

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        try:
            return await self._search(terms)
        except Exception as e:
            logger.warning(f"Claude web search failed. Error: {e}")
            return []

    async def _search(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        user_prompt = (
            f"Search the web for reporting, fact-checks and primary sources about "
            f"this claim: {terms.claim}\n\n"
            f"Find up to {self._max_results} relevant sources, preferring "
            "fact-checking organisations, established news outlets and official "
            "or academic publications."
        )

        response = await self._client.messages.create(
            model=self._model,
            max_tokens=2048,
            tools=[
                {
                    "type": "web_search_20250305",
                    "name": "web_search",
                    "max_uses": self._max_searches,
                }
            ],
            messages=[{"role": "user", "content": user_prompt}],
        )

        seen_urls: set[str] = set()
        candidates: list[DiscoveryCandidate] = []
        for block in response.content:
            if block.type != "web_search_tool_result":
                continue
            content = block.content
            if not isinstance(content, list):
                continue
            for result in content:
                if result.url in seen_urls:
                    continue
                seen_urls.add(result.url)
                candidates.append(self._parse_search_result(result))

        return candidates[: self._max_results]

    def _parse_search_result(self, result: WebSearchResultBlock) -> DiscoveryCandidate:
        """Parse a web search result into a candidate."""
        # encrypted_content is not human-readable, so no description
        return web_candidate(result.url, result.title, published_date=result.page_age)
