"""Combine extracted evidence into the final fact-check result."""

import asyncio
import logging
import time

from claimcheck.analyzer.base import AIAnalyzer
from claimcheck.data import Analysis, Evidence, FactCheckResult
from claimcheck.errors import SynthesisError
from claimcheck.synthesis.aggregate import (
    analyze_social_signals,
    assess_risk,
    build_timeline,
    categorize_evidence,
    platform_label,
    source_stats,
)
from claimcheck.synthesis.fallback import fallback_analysis, generate_reasoning, generate_summary

logger = logging.getLogger(__name__)

MIN_PROCESSING_TIME = 0.001


def analysis_sample(evidence: list[Evidence], size: int = 15) -> list[Evidence]:
    """The ``size`` most credible items, original order kept among equals."""
    return sorted(evidence, key=lambda e: -e.credibility_score)[:size]


def build_methodology(
    evidence: list[Evidence],
    *,
    pipeline: str,
    used_fallback: bool,
    placeholders_discarded: int = 0,
) -> str:
    platforms = {platform_label(e) for e in evidence}
    text = (
        f"Analyzed {len(evidence)} evidence item(s) across {len(platforms)} platform(s) "
        f"with the {pipeline} pipeline: concurrent discovery, content extraction, "
        "credibility scoring and sentiment analysis."
    )
    if used_fallback:
        text += " The verdict comes from the rule-based fallback over evidence sentiment."
    else:
        text += " The verdict comes from AI analysis of the most credible evidence."
    if placeholders_discarded:
        text += (
            f" {placeholders_discarded} placeholder result(s) without source content "
            "were discarded and not scored."
        )
    return text


class Synthesizer:
    """Categorize, aggregate and judge evidence into a FactCheckResult.

    The AI analyzer is only ever asked about the ``sample_size`` most
    credible items. Any analyzer failure, a timeout, or an empty evidence
    list yields the deterministic fallback verdict instead.

    Args:
        analyzer: AI-analysis capability, or None to always use the fallback.
        analysis_timeout: Default bound on the analyzer call in seconds.
        sample_size: Evidence items handed to the analyzer.
    """

    def __init__(
        self,
        analyzer: AIAnalyzer | None = None,
        *,
        analysis_timeout: float = 20.0,
        sample_size: int = 15,
    ) -> None:
        self._analyzer = analyzer
        self._analysis_timeout = analysis_timeout
        self._sample_size = sample_size

    async def analyze(
        self,
        claim: str,
        evidence: list[Evidence],
        *,
        timeout: float | None = None,
    ) -> Analysis:
        """Obtain a verdict from the analyzer, falling back to the ratio rule."""
        if self._analyzer is None:
            return fallback_analysis(claim, evidence)
        if not evidence:
            logger.warning("No evidence available for analysis, using fallback")
            return fallback_analysis(claim, evidence)

        bound = self._analysis_timeout if timeout is None else min(timeout, self._analysis_timeout)
        if bound <= 0:
            logger.warning("No time left for AI analysis, using fallback")
            return fallback_analysis(claim, evidence)

        sample = analysis_sample(evidence, self._sample_size)
        try:
            result = await asyncio.wait_for(self._analyzer.analyze(claim, sample), timeout=bound)
        except TimeoutError:
            logger.warning(f"AI analysis timed out after {bound:.1f}s, using fallback")
            return fallback_analysis(claim, evidence)
        except SynthesisError as e:
            logger.warning(f"AI analysis failed, using fallback. Error: {e}")
            return fallback_analysis(claim, evidence)
        except Exception as e:
            logger.error(f"Unexpected AI analysis error, using fallback. Error: {e}")
            return fallback_analysis(claim, evidence)

        return Analysis(
            verdict=result.verdict,
            confidence=result.confidence,
            summary=generate_summary(claim, evidence, result.verdict, result.confidence),
            reasoning=result.reasoning
            or generate_reasoning(claim, evidence, result.verdict, result.confidence),
        )

    def build_result(
        self,
        evidence: list[Evidence],
        analysis: Analysis,
        started_at: float,
        *,
        pipeline: str = "comprehensive",
        placeholders_discarded: int = 0,
    ) -> FactCheckResult:
        """Assemble the immutable result from evidence and a finished analysis.

        Args:
            evidence: Every evidence item of the run.
            analysis: Verdict, confidence and text.
            started_at: ``time.monotonic()`` reading at the start of the run.
            pipeline: Name of the pipeline that produced the result.
            placeholders_discarded: Placeholder candidates dropped before extraction.
        """
        return FactCheckResult(
            verdict=analysis.verdict,
            confidence=analysis.confidence,
            summary=analysis.summary,
            reasoning=analysis.reasoning,
            evidence=categorize_evidence(evidence),
            sources=source_stats(evidence),
            timeline=build_timeline(evidence),
            social_signals=analyze_social_signals(evidence),
            risk_assessment=assess_risk(analysis.verdict, analysis.confidence, evidence),
            processing_time=max(time.monotonic() - started_at, MIN_PROCESSING_TIME),
            methodology=build_methodology(
                evidence,
                pipeline=pipeline,
                used_fallback=analysis.used_fallback,
                placeholders_discarded=placeholders_discarded,
            ),
            pipeline=pipeline,
            placeholders_discarded=placeholders_discarded,
        )

    async def synthesize(
        self,
        claim: str,
        evidence: list[Evidence],
        started_at: float,
        *,
        pipeline: str = "comprehensive",
        placeholders_discarded: int = 0,
        timeout: float | None = None,
    ) -> FactCheckResult:
        """Analyze the evidence and build the complete FactCheckResult.

        Never raises for analyzer problems; those end in the fallback verdict.
        """
        analysis = await self.analyze(claim, evidence, timeout=timeout)
        return self.build_result(
            evidence,
            analysis,
            started_at,
            pipeline=pipeline,
            placeholders_discarded=placeholders_discarded,
        )
