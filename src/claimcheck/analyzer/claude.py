"""Claude-based verdict analyzer using structured JSON output."""

import json
import logging
import os

import anthropic

from claimcheck.data import AnalyzerVerdict, Evidence, Verdict, clamp
from claimcheck.errors import SynthesisError

logger = logging.getLogger(__name__)

EVIDENCE_TEXT_LIMIT = 500

SYSTEM_PROMPT = """\
You are a careful fact-checker. You are given a claim and numbered evidence \
excerpts gathered from the web, each with its publisher, source type and a \
0-10 credibility score. Judge the claim using only this evidence. Respond \
ONLY with a JSON object (no markdown fences, no commentary) with these fields:
- "verdict": one of: TRUE, FALSE, PARTIALLY_TRUE, MISLEADING, UNVERIFIED
- "confidence": integer 0-100 measuring how strongly the evidence supports \
the verdict. Use UNVERIFIED with low confidence when the evidence is thin, \
off-topic or contradictory without a clear majority of credible sources.
- "reasoning": a few paragraphs explaining the verdict, citing evidence by \
number as [1], [2], etc., and noting any limitations of the evidence.\
"""


def _evidence_to_prompt_text(evidence: Evidence, index: int) -> str:
    """Format one evidence item for inclusion in the analysis prompt."""
    parts = [f"[{index + 1}] {evidence.source_name} ({evidence.source_type})"]
    parts.append(f"  Credibility: {evidence.credibility_score:.1f}/10")
    parts.append(f"  URL: {evidence.url}")
    if evidence.published_date:
        parts.append(f"  Published: {evidence.published_date}")
    parts.append(f"  Title: {evidence.title}")
    parts.append(f"  Text: {evidence.content[:EVIDENCE_TEXT_LIMIT]}")
    return "\n".join(parts)


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [line for line in lines if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_verdict(text: str) -> AnalyzerVerdict:
    """Parse the JSON object from Claude's response.

    Raises:
        SynthesisError: If the response is not a JSON object with a known
            verdict and a numeric confidence.
    """
    try:
        parsed = json.loads(_strip_fences(text))
    except json.JSONDecodeError as e:
        raise SynthesisError(f"Analyzer returned invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise SynthesisError("Analyzer response is not a JSON object")

    try:
        verdict = Verdict(str(parsed.get("verdict", "")).strip().upper())
    except ValueError as e:
        raise SynthesisError(f"Analyzer returned unknown verdict: {parsed.get('verdict')}") from e

    raw_confidence = parsed.get("confidence")
    if isinstance(raw_confidence, bool) or not isinstance(raw_confidence, int | float):
        raise SynthesisError(f"Analyzer returned non-numeric confidence: {raw_confidence}")

    return AnalyzerVerdict(
        verdict=verdict,
        confidence=round(clamp(float(raw_confidence), 0, 100)),
        reasoning=str(parsed.get("reasoning", "")).strip(),
    )


class ClaudeAnalyzer:
    """Judge a claim against gathered evidence using Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Response token limit.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_tokens: int = 2048,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_tokens = max_tokens

    async def analyze(self, claim: str, evidence: list[Evidence]) -> AnalyzerVerdict:
        if not evidence:
            raise SynthesisError("No evidence to analyze")

        evidence_texts = [_evidence_to_prompt_text(e, i) for i, e in enumerate(evidence)]
        user_prompt = (
            f'Claim: "{claim}"\n\n'
            f"Evidence ({len(evidence)} items):\n\n" + "\n\n".join(evidence_texts)
        )

        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=0.2,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIError as e:
            raise SynthesisError(f"Claude analysis request failed: {e}") from e

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        result = parse_verdict(response_text)
        logger.info(f"Claude verdict for claim: {result.verdict} ({result.confidence}%)")
        return result
