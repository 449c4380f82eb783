from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class BrowserAction:
    """One step of a scripted browser interaction."""

    action: str
    selector: str | None = None
    timeout_ms: int | None = None
    direction: str | None = None
    amount: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"action": self.action}
        if self.selector is not None:
            payload["selector"] = self.selector
        if self.timeout_ms is not None:
            payload["timeout"] = self.timeout_ms
        if self.direction is not None:
            payload["direction"] = self.direction
        if self.amount is not None:
            payload["amount"] = self.amount
        return payload


class ContentFetcher(Protocol):
    """Fetches rendered page content. ``None`` means "drop this candidate"."""

    async def fetch(self, url: str, *, timeout: float | None = None) -> str | None: ...


class SearchPageFetcher(ContentFetcher, Protocol):
    """A content fetcher that can also retrieve search-engine result pages."""

    async def serp(self, url: str, *, timeout: float | None = None) -> str | None: ...


class ScriptedInteractor(Protocol):
    """Runs a browser script against a page and returns the resulting markup."""

    async def interact(
        self,
        url: str,
        script: list[BrowserAction],
        *,
        timeout: float | None = None,
    ) -> str | None: ...
