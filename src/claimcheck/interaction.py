"""Dynamic interaction: re-render social pages with a browser script and merge richer content."""

import logging

from claimcheck.access.base import BrowserAction, ScriptedInteractor
from claimcheck.data import Evidence
from claimcheck.extract import extract_claims, extract_document
from claimcheck.fanout import fan_out
from claimcheck.url import extract_domain

logger = logging.getLogger(__name__)

DYNAMIC_DOMAINS: tuple[str, ...] = (
    "twitter.com",
    "x.com",
    "facebook.com",
    "instagram.com",
    "tiktok.com",
    "youtube.com",
)

DEFAULT_SCRIPT: tuple[BrowserAction, ...] = (
    BrowserAction("wait", selector="body", timeout_ms=5000),
    BrowserAction("scroll", direction="down", amount=3),
    BrowserAction("wait", timeout_ms=2000),
)


def requires_interaction(evidence: Evidence) -> bool:
    domain = extract_domain(evidence.url)
    return any(domain == d or domain.endswith(f".{d}") for d in DYNAMIC_DOMAINS)


class DynamicInteractionStage:
    """Enrich evidence from script-rendered platforms.

    Only ``content`` and ``claims`` of an Evidence item are ever changed.
    A failed interaction leaves its item untouched, and merges that landed
    before the phase deadline are kept.

    Args:
        interactor: Scripted-interaction capability.
        interaction_timeout: Per-interaction timeout in seconds.
        script: Browser actions run on every page.
    """

    def __init__(
        self,
        interactor: ScriptedInteractor,
        *,
        interaction_timeout: float = 12.0,
        script: tuple[BrowserAction, ...] = DEFAULT_SCRIPT,
    ) -> None:
        self._interactor = interactor
        self._timeout = interaction_timeout
        self._script = list(script)

    def select(self, evidence: list[Evidence]) -> list[Evidence]:
        return [e for e in evidence if requires_interaction(e)]

    async def run(
        self,
        evidence: list[Evidence],
        *,
        timeout: float | None = None,
    ) -> tuple[list[Evidence], bool]:
        """Interact with every qualifying item, merging results in place.

        Returns:
            Tuple of (the same evidence list, whether the deadline fired).
        """
        targets = self.select(evidence)
        if not targets:
            logger.info("No sources require dynamic interaction")
            return (evidence, False)

        outcome = await fan_out(
            [self._enrich(e) for e in targets],
            timeout=timeout,
            item_timeout=self._timeout + 2.0,
            labels=[e.url for e in targets],
        )
        merged = sum(1 for ok in outcome.values() if ok)
        logger.info(f"Dynamic interaction enriched {merged}/{len(targets)} item(s)")
        return (evidence, outcome.timed_out)

    async def _enrich(self, evidence: Evidence) -> bool:
        html = await self._interactor.interact(evidence.url, self._script, timeout=self._timeout)
        if html is None:
            return False
        document = extract_document(html, fallback_title=evidence.title)
        evidence.merge_interaction(document.content, extract_claims(document.content))
        return True
