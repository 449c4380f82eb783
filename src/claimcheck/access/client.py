"""Content unlocking through the Bright Data request API."""

import logging
import os
from typing import Any

import httpx

from claimcheck.access.base import BrowserAction

UNLOCKER_API_URL = "https://api.brightdata.com/request"

logger = logging.getLogger(__name__)


class UnlockerClient:
    """Fetch pages, search result pages and scripted renders through Bright Data.

    One client serves three zones: the Web Unlocker zone for plain page
    fetches, the SERP zone for search-engine result pages and the browser
    zone for scripted interactions. Every failure (transport error, non-2xx
    status, empty body) is logged and returned as ``None``.

    Args:
        api_token: Bright Data API token (defaults to BRIGHT_DATA_API_TOKEN env var).
        web_unlocker_zone: Zone used by ``fetch``.
        serp_zone: Zone used by ``serp``.
        browser_zone: Zone used by ``interact``.
        fetch_timeout: Default per-call timeout for ``fetch`` in seconds.
        serp_timeout: Default per-call timeout for ``serp`` in seconds.
        interaction_timeout: Default per-call timeout for ``interact`` in seconds.
    """

    def __init__(
        self,
        *,
        api_token: str | None = None,
        web_unlocker_zone: str = "web_unlocker1",
        serp_zone: str = "serp_api1",
        browser_zone: str = "scraping_browser1",
        fetch_timeout: float = 10.0,
        serp_timeout: float = 15.0,
        interaction_timeout: float = 12.0,
    ) -> None:
        self._api_token = api_token or os.environ.get("BRIGHT_DATA_API_TOKEN")
        if not self._api_token:
            raise ValueError(
                "Bright Data API token required. "
                "Pass api_token or set BRIGHT_DATA_API_TOKEN env var."
            )
        self._web_unlocker_zone = web_unlocker_zone
        self._serp_zone = serp_zone
        self._browser_zone = browser_zone
        self._fetch_timeout = fetch_timeout
        self._serp_timeout = serp_timeout
        self._interaction_timeout = interaction_timeout

    async def fetch(self, url: str, *, timeout: float | None = None) -> str | None:
        """Fetch rendered HTML for ``url`` via the Web Unlocker zone."""
        return await self._request(
            {"url": url, "zone": self._web_unlocker_zone},
            timeout=timeout or self._fetch_timeout,
        )

    async def serp(self, url: str, *, timeout: float | None = None) -> str | None:
        """Fetch a search-engine result page via the SERP zone."""
        return await self._request(
            {"url": url, "zone": self._serp_zone},
            timeout=timeout or self._serp_timeout,
        )

    async def interact(
        self,
        url: str,
        script: list[BrowserAction],
        *,
        timeout: float | None = None,
    ) -> str | None:
        """Render ``url`` in the browser zone after running ``script``."""
        return await self._request(
            {
                "url": url,
                "zone": self._browser_zone,
                "browser_actions": [step.to_payload() for step in script],
            },
            timeout=timeout or self._interaction_timeout,
        )

    async def _request(self, body: dict[str, Any], *, timeout: float) -> str | None:
        payload = {**body, "format": "raw", "data_format": "html"}
        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(UNLOCKER_API_URL, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Unlocker request failed for {body['url']} ({body['zone']}): {e}")
            return None

        text = response.text
        if not text or not text.strip():
            logger.warning(f"Unlocker returned empty body for {body['url']}")
            return None
        return text
