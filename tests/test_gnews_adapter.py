"""Tests for GNewsAdapter."""

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from claimcheck.data import SearchTerms, SourceType
from claimcheck.search import GNewsAdapter

TERMS = SearchTerms(claim="The earth is flat", keywords=("earth", "flat", "planet", "round"))


class TestGNewsAdapter:
    """Tests for GNewsAdapter."""

    @pytest.fixture
    def mock_response_data(self) -> dict[str, Any]:
        """Sample GNews API response."""
        return {
            "totalArticles": 2,
            "articles": [
                {
                    "title": "Article 1",
                    "url": "https://www.bbc.com/news/article1",
                    "source": {"name": "BBC News"},
                    "publishedAt": "2024-02-01T10:00:00Z",
                    "description": "Description 1",
                },
                {
                    "title": "Article 2",
                    "url": "https://example.com/article2",
                    "source": {"name": "Other News"},
                    "publishedAt": "2024-02-01T11:00:00Z",
                    "description": None,
                },
                {"title": "No url"},
            ],
        }

    @pytest.fixture
    def adapter(self) -> GNewsAdapter:
        return GNewsAdapter(api_key="test-key")

    def test_init_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GNEWS_API_KEY", raising=False)
        with pytest.raises(ValueError, match="API key required"):
            GNewsAdapter()

    def test_init_uses_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GNEWS_API_KEY", "env-key")
        assert GNewsAdapter()._api_key == "env-key"

    async def test_discover_returns_candidates(
        self,
        adapter: GNewsAdapter,
        mock_response_data: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should map GNews articles onto news candidates."""
        captured: dict[str, Any] = {}
        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        async def mock_get(self: Any, url: str, **kwargs: Any) -> MagicMock:
            captured.update(kwargs["params"])
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        candidates = await adapter.discover(TERMS)

        assert captured["q"] == "earth flat planet"
        assert captured["lang"] == "en"
        assert [c.title for c in candidates] == ["Article 1", "Article 2"]
        assert candidates[0].source_name == "BBC News"
        assert candidates[0].source_type == SourceType.NEWS
        assert candidates[0].provisional_credibility == 9.0
        assert candidates[1].description == ""

    async def test_discover_http_error_returns_empty(
        self,
        adapter: GNewsAdapter,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should return nothing on an HTTP error."""
        async def mock_get(*args: Any, **kwargs: Any) -> MagicMock:
            raise httpx.ConnectError("offline")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        assert await adapter.discover(TERMS) == []
