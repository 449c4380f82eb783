"""Tests for ClaudeSearchAdapter."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from claimcheck.data import SearchTerms
from claimcheck.search import ClaudeSearchAdapter


@pytest.fixture
def mock_web_search_result() -> MagicMock:
    """Create a mock web search result."""
    result = MagicMock()
    result.type = "web_search_result"
    result.url = "https://www.snopes.com/fact-check/flat-earth/"
    result.title = "Is the Earth Flat?"
    result.page_age = "February 1, 2024"
    return result


@pytest.fixture
def mock_response(mock_web_search_result: MagicMock) -> MagicMock:
    """Create a mock API response with web search results."""
    text_block = MagicMock()
    text_block.type = "text"

    tool_result = MagicMock()
    tool_result.type = "web_search_tool_result"
    tool_result.content = [mock_web_search_result]

    response = MagicMock()
    response.content = [text_block, tool_result]
    return response


@pytest.fixture
def adapter(mock_response: MagicMock) -> ClaudeSearchAdapter:
    """Create an adapter with mocked API client."""
    a = ClaudeSearchAdapter(api_key="test-key")
    object.__setattr__(a._client.messages, "create", AsyncMock(return_value=mock_response))
    return a


TERMS = SearchTerms(claim="The earth is flat")


async def test_discover_returns_candidates(adapter: ClaudeSearchAdapter) -> None:
    candidates = await adapter.discover(TERMS)

    assert len(candidates) == 1
    assert candidates[0].url == "https://www.snopes.com/fact-check/flat-earth/"
    assert candidates[0].title == "Is the Earth Flat?"
    assert candidates[0].published_date == "February 1, 2024"
    assert candidates[0].provisional_credibility == 9.0


async def test_discover_deduplicates_by_url(
    adapter: ClaudeSearchAdapter, mock_response: MagicMock, mock_web_search_result: MagicMock
) -> None:
    """Should keep one candidate per cited URL."""
    mock_response.content[1].content = [mock_web_search_result, mock_web_search_result]

    assert len(await adapter.discover(TERMS)) == 1


async def test_discover_calls_api_with_web_search_tool(adapter: ClaudeSearchAdapter) -> None:
    await adapter.discover(TERMS)

    mock_create: AsyncMock = adapter._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["tools"][0]["type"] == "web_search_20250305"
    assert call_kwargs["tools"][0]["max_uses"] == 2
    assert "The earth is flat" in call_kwargs["messages"][0]["content"]


async def test_discover_swallows_api_errors(adapter: ClaudeSearchAdapter) -> None:
    """Should return nothing when the API call fails."""
    object.__setattr__(
        adapter._client.messages, "create", AsyncMock(side_effect=RuntimeError("overloaded"))
    )

    assert await adapter.discover(TERMS) == []
