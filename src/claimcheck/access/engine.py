"""Access & extraction: turn ranked candidates into scored Evidence."""

import asyncio
import logging
import time

from claimcheck.access.base import ContentFetcher
from claimcheck.data import DiscoveryCandidate, Evidence
from claimcheck.errors import FetchError
from claimcheck.extract import (
    ExtractedDocument,
    extract_claims,
    extract_document,
    extract_entities,
    extract_keywords,
    sentiment_score,
)
from claimcheck.fanout import fan_out

logger = logging.getLogger(__name__)


def evidence_from_document(candidate: DiscoveryCandidate, document: ExtractedDocument) -> Evidence:
    """Score an extracted page, inheriting provenance fields from its candidate."""
    content = document.content
    return Evidence(
        url=candidate.url,
        title=document.title or candidate.title,
        content=content,
        source_name=candidate.source_name,
        source_type=candidate.source_type,
        credibility_score=candidate.provisional_credibility,
        sentiment=sentiment_score(content),
        author=document.author or candidate.author,
        published_date=document.published_date or candidate.published_date,
        entities=extract_entities(content),
        keywords=extract_keywords(content),
        claims=extract_claims(content),
        platform=candidate.platform,
        verified=candidate.verified,
        engagement=candidate.engagement,
    )


def evidence_from_candidate(candidate: DiscoveryCandidate) -> Evidence:
    """Evidence built from discovery metadata alone, with neutral sentiment."""
    text = candidate.description or candidate.title
    return Evidence(
        url=candidate.url,
        title=candidate.title,
        content=text,
        source_name=candidate.source_name,
        source_type=candidate.source_type,
        credibility_score=candidate.provisional_credibility,
        sentiment=0.0,
        author=candidate.author,
        published_date=candidate.published_date,
        entities=extract_entities(text),
        keywords=extract_keywords(text),
        platform=candidate.platform,
        verified=candidate.verified,
        engagement=candidate.engagement,
    )


class AccessExtractionEngine:
    """Fetch ranked candidates concurrently and extract Evidence from each page.

    Placeholder candidates are skipped. A candidate whose fetch fails, times
    out or cannot be parsed is dropped. When the phase deadline fires, the
    Evidence completed so far is kept.

    Args:
        fetcher: Content-fetch capability.
        max_candidates: Upper bound on candidates fetched per run.
        fetch_timeout: Per-fetch timeout in seconds.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        *,
        max_candidates: int = 50,
        fetch_timeout: float = 10.0,
    ) -> None:
        self._fetcher = fetcher
        self._max_candidates = max_candidates
        self._fetch_timeout = fetch_timeout

    async def run(
        self,
        candidates: list[DiscoveryCandidate],
        *,
        timeout: float | None = None,
    ) -> tuple[list[Evidence], bool]:
        """Access and extract the given candidates.

        Args:
            candidates: Ranked discovery output.
            timeout: Phase deadline in seconds.

        Returns:
            Tuple of (evidence in candidate order, whether the deadline fired).
        """
        real = [c for c in candidates if not c.is_placeholder]
        skipped = len(candidates) - len(real)
        if skipped:
            logger.info(f"Skipping {skipped} placeholder candidate(s)")
        selected = real[: self._max_candidates]
        if not selected:
            return ([], False)

        t0 = time.monotonic()
        outcome = await fan_out(
            [self._access_one(c) for c in selected],
            timeout=timeout,
            # Fetch timeout is enforced by the fetcher; the margin covers parsing.
            item_timeout=self._fetch_timeout + 2.0,
            labels=[c.url for c in selected],
        )
        evidence = [e for e in outcome.values() if e is not None]
        logger.info(
            f"Extracted {len(evidence)} evidence item(s) from {len(selected)} candidate(s) "
            f"in {time.monotonic() - t0:.1f}s"
        )
        return (evidence, outcome.timed_out)

    async def _access_one(self, candidate: DiscoveryCandidate) -> Evidence | None:
        html = await self._fetcher.fetch(candidate.url, timeout=self._fetch_timeout)
        if html is None:
            logger.debug(f"Dropping {candidate.url}: fetch returned nothing")
            return None
        try:
            document = await asyncio.to_thread(
                extract_document, html, fallback_title=candidate.title
            )
        except Exception as e:
            raise FetchError(f"Could not extract content from {candidate.url}: {e}") from e
        return evidence_from_document(candidate, document)
