"""Content access: fetch, SERP and scripted-interaction capabilities."""

from claimcheck.access.base import (
    BrowserAction,
    ContentFetcher,
    ScriptedInteractor,
    SearchPageFetcher,
)
from claimcheck.access.client import UnlockerClient
from claimcheck.access.engine import AccessExtractionEngine

__all__ = [
    "AccessExtractionEngine",
    "BrowserAction",
    "ContentFetcher",
    "ScriptedInteractor",
    "SearchPageFetcher",
    "UnlockerClient",
]
