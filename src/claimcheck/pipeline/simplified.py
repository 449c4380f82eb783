"""Simplified fallback pipeline with tight timeouts and no page fetching."""

import asyncio
import logging
import time
from dataclasses import dataclass

from claimcheck.access.engine import evidence_from_candidate
from claimcheck.data import (
    DiscoveryCandidate,
    EvidenceBuckets,
    FactCheckResult,
    RiskAssessment,
    RiskLevel,
    SearchTerms,
    SocialSignals,
    SourceStats,
    Timeline,
    Verdict,
)
from claimcheck.extract import extract_keywords
from claimcheck.pipeline.base import ProgressCallback
from claimcheck.search import SourceAdapter, reduce_candidates
from claimcheck.synthesis import Synthesizer
from claimcheck.synthesis.synthesizer import MIN_PROCESSING_TIME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimplifiedStep:
    """One adapter call of the simplified pipeline."""

    adapter: SourceAdapter
    timeout: float
    take: int = 5


def degraded_result(claim: str, started_at: float, reason: str) -> FactCheckResult:
    """The terminal result returned when even the simplified run breaks."""
    return FactCheckResult(
        verdict=Verdict.UNVERIFIED,
        confidence=0,
        summary="Unable to verify claim due to technical limitations.",
        reasoning=(
            f"Analysis could not be completed due to: {reason}. This does not indicate "
            f'that the claim "{claim}" is false, only that verification was not possible '
            "at this time."
        ),
        evidence=EvidenceBuckets(),
        sources=SourceStats(),
        timeline=Timeline(),
        social_signals=SocialSignals(),
        risk_assessment=RiskAssessment(
            level=RiskLevel.MEDIUM,
            factors=("Unable to verify",),
            recommendations=("Seek additional sources",),
        ),
        processing_time=max(time.monotonic() - started_at, MIN_PROCESSING_TIME),
        methodology="Simplified analysis could not gather data due to technical constraints.",
        pipeline="degraded",
    )


class SimplifiedPipeline:
    """Reduced-scope fallback run that always returns a FactCheckResult.

    Flow:
    1. Keywords are taken straight from the claim text
    2. Each step's adapter runs in sequence under its own tight timeout,
       contributing at most ``take`` candidates
    3. The top ``max_candidates`` reduced candidates become Evidence from
       their discovery metadata alone (no fetch, neutral sentiment)
    4. Synthesis with the AI analyzer, falling back to the ratio rule

    Any internal error yields ``degraded_result`` instead of raising.

    Args:
        steps: Adapter calls in the order they are tried.
        synthesizer: Verdict synthesizer.
        max_candidates: Candidates kept after reduction.
        analysis_timeout: Bound on the AI analysis call in seconds.
    """

    def __init__(
        self,
        steps: list[SimplifiedStep],
        synthesizer: Synthesizer,
        *,
        max_candidates: int = 10,
        analysis_timeout: float = 10.0,
    ) -> None:
        self._steps = steps
        self._synthesizer = synthesizer
        self._max_candidates = max_candidates
        self._analysis_timeout = analysis_timeout

    async def run(
        self,
        claim: str,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        started_at = time.monotonic()
        logger.info(f"[SIMPLIFIED] Starting simplified fact-check for: {claim[:50]}")
        try:
            return await self._run(claim, started_at, on_progress)
        except Exception as e:
            logger.error(f"[SIMPLIFIED] Simplified fact-check failed. Error: {e}")
            return degraded_result(claim, started_at, str(e) or type(e).__name__)

    async def _run(
        self,
        claim: str,
        started_at: float,
        on_progress: ProgressCallback | None,
    ) -> FactCheckResult:
        if on_progress:
            on_progress(10)
        keywords = tuple(extract_keywords(claim, limit=5))
        terms = SearchTerms(claim=claim, keywords=keywords)

        if on_progress:
            on_progress(40)
        candidates = reduce_candidates(await self._discover(terms), self._max_candidates)
        real = [c for c in candidates if not c.is_placeholder]
        logger.info(f"[SIMPLIFIED] Discovery found {len(real)} candidate(s)")

        if on_progress:
            on_progress(70)
        evidence = [evidence_from_candidate(c) for c in real]

        if on_progress:
            on_progress(90)
        result = await self._synthesizer.synthesize(
            claim,
            evidence,
            started_at,
            pipeline="simplified",
            placeholders_discarded=len(candidates) - len(real),
            timeout=self._analysis_timeout,
        )
        if on_progress:
            on_progress(100)
        logger.info(
            f"[SIMPLIFIED] Completed in {result.processing_time:.1f}s: "
            f"{result.verdict} ({result.confidence}%)"
        )
        return result

    async def _discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        collected: list[DiscoveryCandidate] = []
        for step in self._steps:
            try:
                found = await asyncio.wait_for(step.adapter.discover(terms), timeout=step.timeout)
            except TimeoutError:
                logger.warning(f"[SIMPLIFIED] {step.adapter.name} timed out after {step.timeout}s")
                continue
            except Exception as e:
                logger.warning(f"[SIMPLIFIED] {step.adapter.name} failed. Error: {e}")
                continue
            collected.extend(found[: step.take])
        return collected
