"""Tests for the rule-based fallback verdict and report text."""

import pytest

from claimcheck.data import Evidence, SourceType, Verdict
from claimcheck.synthesis import fallback_analysis, fallback_verdict
from claimcheck.synthesis.fallback import generate_reasoning, generate_summary


def _with_sentiments(*sentiments: float) -> list[Evidence]:
    return [
        Evidence(
            url=f"https://example.com/{i}",
            title=f"Item {i}",
            content="content",
            source_name="example.com",
            sentiment=s,
        )
        for i, s in enumerate(sentiments)
    ]


def test_no_evidence_is_unverified_low_confidence() -> None:
    """Should report UNVERIFIED with low confidence when nothing was found."""
    assert fallback_verdict([]) == (Verdict.UNVERIFIED, 10)


def test_mostly_supporting_is_true() -> None:
    evidence = _with_sentiments(0.5, 0.5, 0.5, 0.5, -0.5)
    assert fallback_verdict(evidence) == (Verdict.TRUE, 80)


@pytest.mark.parametrize(
    ("sentiments", "expected"),
    [
        ((-0.5, -0.5, -0.5, -0.5, 0.5), (Verdict.FALSE, 80)),
        ((0.5, 0.5, 0.5, 0.0, 0.0, -0.5), (Verdict.PARTIALLY_TRUE, 65)),
        ((-0.5, -0.5, -0.5, 0.5, 0.5), (Verdict.MISLEADING, 70)),
        ((0.0, 0.0, 0.0, 0.5), (Verdict.UNVERIFIED, 50)),
        ((0.5, 0.5, -0.5, -0.5), (Verdict.MISLEADING, 70)),
    ],
)
def test_ratio_rule(sentiments: tuple[float, ...], expected: tuple[Verdict, int]) -> None:
    assert fallback_verdict(_with_sentiments(*sentiments)) == expected


def test_boundary_is_strict() -> None:
    """Should require the ratio to strictly exceed the threshold."""
    # exactly 70% supporting does not reach TRUE
    evidence = _with_sentiments(*([0.5] * 7 + [0.0] * 3))
    assert fallback_verdict(evidence) == (Verdict.PARTIALLY_TRUE, 65)


def test_summary_without_evidence() -> None:
    summary = generate_summary("The sky is green", [], Verdict.UNVERIFIED, 10)
    assert "could not be verified due to a lack of available evidence" in summary


def test_summary_unverified_with_evidence() -> None:
    summary = generate_summary("The sky is green", _with_sentiments(0.0, 0.0), Verdict.UNVERIFIED, 50)
    assert "remains unverified after reviewing 2 sources" in summary


def test_summary_with_verdict() -> None:
    summary = generate_summary("The sky is blue", _with_sentiments(0.5), Verdict.TRUE, 80)
    assert summary.startswith('Based on an analysis of 1 sources, the claim "The sky is blue"')
    assert "appears to be true" in summary
    assert "WEB" in summary


def test_reasoning_breakdown() -> None:
    """Should count supporting and contradicting sources."""
    evidence = _with_sentiments(0.5, -0.5, 0.0)
    evidence[0].source_type = SourceType.FACT_CHECK
    reasoning = generate_reasoning("A claim", evidence, Verdict.UNVERIFIED, 50)
    assert reasoning.startswith('# Fact-Check Analysis: "A claim"')
    assert "## Verdict: Unverified" in reasoning
    assert "**Supporting Evidence**: 1 sources" in reasoning
    assert "**Contradicting Evidence**: 1 sources" in reasoning
    assert "**Fact-Checking Organizations**: 1 sources reviewed." in reasoning
    assert "Social Media Signals" not in reasoning


def test_reasoning_without_evidence_mentions_limitations() -> None:
    reasoning = generate_reasoning("A claim", [], Verdict.UNVERIFIED, 10)
    assert "No direct evidence found" in reasoning
    assert "Limitations:" in reasoning


def test_fallback_analysis_flags_fallback() -> None:
    analysis = fallback_analysis("A claim", _with_sentiments(0.5))
    assert analysis.used_fallback
    assert analysis.verdict == Verdict.TRUE
    assert analysis.confidence == 80
