"""Tests for Synthesizer."""

import asyncio
import time
from unittest.mock import AsyncMock

from claimcheck.data import AnalyzerVerdict, Evidence, Verdict
from claimcheck.errors import SynthesisError
from claimcheck.synthesis import Synthesizer, analysis_sample
from claimcheck.synthesis.synthesizer import MIN_PROCESSING_TIME, build_methodology


def _evidence(n: int, sentiment: float = 0.5) -> list[Evidence]:
    return [
        Evidence(
            url=f"https://example.com/{i}",
            title=f"Item {i}",
            content="content",
            source_name="example.com",
            credibility_score=i % 10,
            sentiment=sentiment,
        )
        for i in range(n)
    ]


def _analyzer(result: AnalyzerVerdict | Exception) -> AsyncMock:
    analyzer = AsyncMock()
    if isinstance(result, Exception):
        analyzer.analyze.side_effect = result
    else:
        analyzer.analyze.return_value = result
    return analyzer


def test_analysis_sample_takes_most_credible() -> None:
    """Should send the most credible evidence to the analyzer."""
    sample = analysis_sample(_evidence(30), size=5)
    assert len(sample) == 5
    assert all(e.credibility_score == 9 for e in sample[:3])
    assert [e.credibility_score for e in sample] == sorted(
        (e.credibility_score for e in sample), reverse=True
    )


async def test_uses_analyzer_verdict() -> None:
    analyzer = _analyzer(AnalyzerVerdict(verdict=Verdict.FALSE, confidence=92, reasoning="Debunked."))
    synthesizer = Synthesizer(analyzer, sample_size=15)

    analysis = await synthesizer.analyze("A claim", _evidence(40))

    assert analysis.verdict == Verdict.FALSE
    assert analysis.confidence == 92
    assert analysis.reasoning == "Debunked."
    assert not analysis.used_fallback
    sample = analyzer.analyze.call_args.args[1]
    assert len(sample) == 15


async def test_empty_reasoning_is_generated() -> None:
    analyzer = _analyzer(AnalyzerVerdict(verdict=Verdict.TRUE, confidence=70, reasoning=""))
    analysis = await Synthesizer(analyzer).analyze("A claim", _evidence(2))
    assert analysis.reasoning.startswith("# Fact-Check Analysis")


async def test_falls_back_on_synthesis_error() -> None:
    synthesizer = Synthesizer(_analyzer(SynthesisError("bad json")))
    analysis = await synthesizer.analyze("A claim", _evidence(5))
    assert analysis.used_fallback
    assert analysis.verdict == Verdict.TRUE
    assert analysis.confidence == 80


async def test_falls_back_on_unexpected_error() -> None:
    synthesizer = Synthesizer(_analyzer(RuntimeError("boom")))
    analysis = await synthesizer.analyze("A claim", _evidence(5))
    assert analysis.used_fallback


async def test_falls_back_on_timeout() -> None:
    """Should use the rule verdict when analysis times out."""
    async def slow(claim: str, evidence: list[Evidence]) -> AnalyzerVerdict:
        await asyncio.sleep(5)
        return AnalyzerVerdict(verdict=Verdict.TRUE, confidence=99, reasoning="late")

    analyzer = AsyncMock()
    analyzer.analyze.side_effect = slow
    synthesizer = Synthesizer(analyzer, analysis_timeout=0.01)

    analysis = await synthesizer.analyze("A claim", _evidence(5))

    assert analysis.used_fallback


async def test_no_evidence_skips_analyzer() -> None:
    """Should not call the analyzer without evidence."""
    analyzer = _analyzer(AnalyzerVerdict(verdict=Verdict.TRUE, confidence=99, reasoning="x"))
    analysis = await Synthesizer(analyzer).analyze("A claim", [])
    analyzer.analyze.assert_not_called()
    assert analysis.verdict == Verdict.UNVERIFIED
    assert analysis.confidence == 10


async def test_exhausted_timeout_skips_analyzer() -> None:
    analyzer = _analyzer(AnalyzerVerdict(verdict=Verdict.TRUE, confidence=99, reasoning="x"))
    analysis = await Synthesizer(analyzer).analyze("A claim", _evidence(3), timeout=0)
    analyzer.analyze.assert_not_called()
    assert analysis.used_fallback


async def test_without_analyzer_uses_rule() -> None:
    analysis = await Synthesizer(None).analyze("A claim", _evidence(3, sentiment=-0.6))
    assert analysis.verdict == Verdict.FALSE
    assert analysis.used_fallback


async def test_synthesize_builds_full_result() -> None:
    """Should build a complete FactCheckResult."""
    evidence = _evidence(6)
    evidence[0].sentiment = -0.5
    evidence[1].sentiment = 0.0
    result = await Synthesizer(None).synthesize(
        "A claim",
        evidence,
        time.monotonic(),
        pipeline="simplified",
        placeholders_discarded=2,
    )

    assert result.pipeline == "simplified"
    assert result.placeholders_discarded == 2
    assert result.evidence_count == 6
    assert len(result.evidence.supporting) == 4
    assert len(result.evidence.contradicting) == 1
    assert len(result.evidence.neutral) == 1
    assert result.sources.total == 6
    assert result.processing_time >= MIN_PROCESSING_TIME
    assert "2 placeholder result(s)" in result.methodology


async def test_synthesize_with_no_evidence() -> None:
    result = await Synthesizer(None).synthesize("The earth is flat", [], time.monotonic())
    assert result.verdict == Verdict.UNVERIFIED
    assert result.evidence_count == 0
    assert result.processing_time > 0


def test_methodology_mentions_verdict_source() -> None:
    evidence = _evidence(2)
    assert "AI analysis" in build_methodology(evidence, pipeline="comprehensive", used_fallback=False)
    assert "rule-based fallback" in build_methodology(evidence, pipeline="comprehensive", used_fallback=True)
