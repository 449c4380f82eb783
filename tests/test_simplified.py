"""Tests for SimplifiedPipeline."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from claimcheck.data import DiscoveryCandidate, PlaceholderCandidate, RiskLevel, SearchTerms, Verdict
from claimcheck.pipeline import SimplifiedPipeline, SimplifiedStep
from claimcheck.search import AdapterKind
from claimcheck.synthesis import Synthesizer

CLAIM = "Drinking coffee every morning causes dehydration"


class FakeAdapter:
    kind = AdapterKind.SEARCH_ENGINE

    def __init__(
        self,
        name: str,
        results: list[DiscoveryCandidate] | None = None,
        *,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.name = name
        self.results = results or []
        self.delay = delay
        self.error = error
        self.calls: list[SearchTerms] = []

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        self.calls.append(terms)
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.results


def _candidates(prefix: str, n: int) -> list[DiscoveryCandidate]:
    return [
        DiscoveryCandidate(
            url=f"https://{prefix}.example.com/{i}",
            title=f"{prefix} result {i}",
            source_name=f"{prefix}.example.com",
            description="Coffee has a mild diuretic effect but does not dehydrate.",
        )
        for i in range(n)
    ]


async def test_collects_from_each_step() -> None:
    """Should take results from each configured step."""
    web = FakeAdapter("web", _candidates("web", 8))
    news = FakeAdapter("news", _candidates("news", 8))
    pipeline = SimplifiedPipeline(
        [SimplifiedStep(web, timeout=1.0, take=5), SimplifiedStep(news, timeout=1.0, take=3)],
        Synthesizer(None),
    )
    progress: list[int] = []

    result = await pipeline.run(CLAIM, progress.append)

    assert progress == [10, 40, 70, 90, 100]
    assert result.pipeline == "simplified"
    assert result.evidence_count == 8
    # metadata-only evidence is neutral
    assert len(result.evidence.neutral) == 8
    assert result.verdict == Verdict.UNVERIFIED
    assert result.confidence == 50
    assert web.calls[0].claim == CLAIM
    assert "coffee" in web.calls[0].keywords


async def test_caps_candidates() -> None:
    adapter = FakeAdapter("web", _candidates("web", 20))
    pipeline = SimplifiedPipeline(
        [SimplifiedStep(adapter, timeout=1.0, take=20)],
        Synthesizer(None),
        max_candidates=10,
    )

    result = await pipeline.run(CLAIM)

    assert result.evidence_count == 10


async def test_failing_and_slow_steps_are_skipped() -> None:
    """Should skip steps that fail or overrun."""
    pipeline = SimplifiedPipeline(
        [
            SimplifiedStep(FakeAdapter("broken", error=RuntimeError("down")), timeout=1.0),
            SimplifiedStep(FakeAdapter("slow", _candidates("slow", 3), delay=5.0), timeout=0.01),
            SimplifiedStep(FakeAdapter("ok", _candidates("ok", 2)), timeout=1.0),
        ],
        Synthesizer(None),
    )

    result = await pipeline.run(CLAIM)

    assert result.evidence_count == 2
    assert result.sources.by_platform == {"ok.example.com": 2}


async def test_placeholders_are_discarded() -> None:
    placeholder = PlaceholderCandidate(
        url="https://www.facebook.com/search/posts?q=coffee",
        title="Facebook search",
        source_name="Facebook",
        reason="blocked",
    )
    adapter = FakeAdapter("social", [placeholder, *_candidates("web", 1)])
    pipeline = SimplifiedPipeline([SimplifiedStep(adapter, timeout=1.0)], Synthesizer(None))

    result = await pipeline.run(CLAIM)

    assert result.evidence_count == 1
    assert result.placeholders_discarded == 1


async def test_no_results_is_unverified() -> None:
    pipeline = SimplifiedPipeline(
        [SimplifiedStep(FakeAdapter("empty"), timeout=1.0)], Synthesizer(None)
    )

    result = await pipeline.run(CLAIM)

    assert result.verdict == Verdict.UNVERIFIED
    assert result.confidence == 10
    assert result.processing_time > 0


async def test_internal_error_gives_degraded_result() -> None:
    """Should return a degraded result on an internal error."""
    synthesizer = MagicMock()
    synthesizer.synthesize = AsyncMock(side_effect=RuntimeError("synthesis exploded"))
    pipeline = SimplifiedPipeline(
        [SimplifiedStep(FakeAdapter("web", _candidates("web", 2)), timeout=1.0)], synthesizer
    )

    result = await pipeline.run(CLAIM)

    assert result.pipeline == "degraded"
    assert result.verdict == Verdict.UNVERIFIED
    assert result.confidence == 0
    assert result.summary == "Unable to verify claim due to technical limitations."
    assert "synthesis exploded" in result.reasoning
    assert result.risk_assessment.level == RiskLevel.MEDIUM
    assert result.risk_assessment.factors == ("Unable to verify",)
    assert result.evidence_count == 0
