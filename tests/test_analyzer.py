"""Tests for ClaudeAnalyzer."""

from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from claimcheck.analyzer import ClaudeAnalyzer
from claimcheck.analyzer.claude import parse_verdict
from claimcheck.data import Evidence, SourceType, Verdict
from claimcheck.errors import SynthesisError


def _response(text: str) -> MagicMock:
    block = MagicMock()
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


def _evidence() -> list[Evidence]:
    return [
        Evidence(
            url="https://www.reuters.com/science/earth",
            title="Earth is round, scientists confirm",
            content="Satellite imagery shows the curvature of the earth.",
            source_name="Reuters",
            source_type=SourceType.NEWS,
            credibility_score=9,
            published_date="2024-02-01",
        )
    ]


@pytest.fixture
def analyzer() -> ClaudeAnalyzer:
    return ClaudeAnalyzer(api_key="test-key")


# -- parse_verdict --


def test_parse_plain_json() -> None:
    result = parse_verdict('{"verdict": "FALSE", "confidence": 91, "reasoning": "See [1]."}')
    assert result.verdict == Verdict.FALSE
    assert result.confidence == 91
    assert result.reasoning == "See [1]."


def test_parse_strips_fences_and_normalizes() -> None:
    """Should accept fenced JSON and normalize the verdict."""
    text = '```json\n{"verdict": "partially_true", "confidence": 64.6}\n```'
    result = parse_verdict(text)
    assert result.verdict == Verdict.PARTIALLY_TRUE
    assert result.confidence == 65
    assert result.reasoning == ""


def test_parse_clamps_confidence() -> None:
    assert parse_verdict('{"verdict": "TRUE", "confidence": 140}').confidence == 100
    assert parse_verdict('{"verdict": "TRUE", "confidence": -3}').confidence == 0


@pytest.mark.parametrize(
    "text",
    [
        "not json at all",
        '["TRUE", 80]',
        '{"verdict": "MAYBE", "confidence": 50}',
        '{"verdict": "TRUE", "confidence": "high"}',
        '{"verdict": "TRUE", "confidence": true}',
        '{"verdict": "TRUE"}',
    ],
)
def test_parse_rejects_unusable_output(text: str) -> None:
    """Should raise when the model output carries no usable verdict."""
    with pytest.raises(SynthesisError):
        parse_verdict(text)


# -- analyze --


async def test_analyze_sends_evidence(analyzer: ClaudeAnalyzer) -> None:
    create = AsyncMock(return_value=_response('{"verdict": "FALSE", "confidence": 95, "reasoning": "x"}'))
    object.__setattr__(analyzer._client.messages, "create", create)

    result = await analyzer.analyze("The earth is flat", _evidence())

    assert result.verdict == Verdict.FALSE
    kwargs = create.call_args.kwargs
    assert kwargs["temperature"] == 0.2
    prompt = kwargs["messages"][0]["content"]
    assert 'Claim: "The earth is flat"' in prompt
    assert "[1] Reuters (NEWS)" in prompt
    assert "Published: 2024-02-01" in prompt


async def test_analyze_rejects_empty_evidence(analyzer: ClaudeAnalyzer) -> None:
    create = AsyncMock()
    object.__setattr__(analyzer._client.messages, "create", create)

    with pytest.raises(SynthesisError):
        await analyzer.analyze("The earth is flat", [])
    create.assert_not_called()


async def test_analyze_wraps_api_errors(analyzer: ClaudeAnalyzer) -> None:
    """Should wrap Anthropic API errors in SynthesisError."""
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    create = AsyncMock(side_effect=anthropic.APIConnectionError(request=request))
    object.__setattr__(analyzer._client.messages, "create", create)

    with pytest.raises(SynthesisError, match="request failed"):
        await analyzer.analyze("The earth is flat", _evidence())


async def test_analyze_rejects_bad_response(analyzer: ClaudeAnalyzer) -> None:
    object.__setattr__(
        analyzer._client.messages, "create", AsyncMock(return_value=_response("I think it is false."))
    )

    with pytest.raises(SynthesisError):
        await analyzer.analyze("The earth is flat", _evidence())
