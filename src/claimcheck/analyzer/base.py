"""Protocol for AI verdict analysis."""

from typing import Protocol

from claimcheck.data import AnalyzerVerdict, Evidence


class AIAnalyzer(Protocol):
    """Interface for producing a verdict and rationale from claim plus evidence."""

    async def analyze(
        self,
        claim: str,
        evidence: list[Evidence],
    ) -> AnalyzerVerdict:
        """Judge the claim against a sample of evidence.

        Args:
            claim: The claim being checked.
            evidence: Evidence sample, most credible first.

        Returns:
            The analyzer's verdict.

        Raises:
            SynthesisError: If no usable verdict could be obtained.
        """
        ...
