"""Exception hierarchy for the fact-check pipeline.

Only ``ClaimValidationError`` and ``PipelineFailedError`` ever reach a job's
caller. Everything else is absorbed somewhere inside the pipeline:

- ``AdapterError`` / ``FetchError`` are caught by the fan-out or the
  extraction engine and cost one adapter or one candidate.
- ``PhaseTimeoutError`` skips a phase forward with partial data, except
  during preprocessing where it aborts the comprehensive run.
- ``BudgetExhaustedError`` aborts the comprehensive run, which the job
  processor answers with the simplified pipeline.
- ``SynthesisError`` is always answered with the deterministic fallback.
"""


class ClaimCheckError(Exception):
    """Base class for all claimcheck errors."""


class ClaimValidationError(ClaimCheckError):
    """The submitted claim was rejected before a job was created."""


class PhaseTimeoutError(ClaimCheckError):
    """A pipeline phase ran past its sub-budget."""

    def __init__(self, phase: str, timeout: float) -> None:
        super().__init__(f"Phase {phase} timed out after {timeout:.1f}s")
        self.phase = phase
        self.timeout = timeout


class BudgetExhaustedError(ClaimCheckError):
    """Not enough global budget remains to safely start a phase."""

    def __init__(self, phase: str, remaining: float) -> None:
        super().__init__(
            f"Insufficient time to start phase {phase}: {remaining:.1f}s remaining"
        )
        self.phase = phase
        self.remaining = remaining


class AdapterError(ClaimCheckError):
    """A discovery adapter failed. Never propagates past the fan-out."""


class FetchError(ClaimCheckError):
    """Fetching or extracting one candidate failed."""


class SynthesisError(ClaimCheckError):
    """The AI-analysis capability failed or returned something unusable."""


class PipelineFailedError(ClaimCheckError):
    """Both the comprehensive and the simplified pipelines failed."""
