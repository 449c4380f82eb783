"""Pipeline protocol, run states and the per-phase recovery table."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from claimcheck.data import FactCheckResult

ProgressCallback = Callable[[int], None]


class PipelineState(StrEnum):
    INITIALIZING = "INITIALIZING"
    PREPROCESSING = "PREPROCESSING"
    DISCOVERY = "DISCOVERY"
    ACCESS_EXTRACT = "ACCESS_EXTRACT"
    INTERACTION = "INTERACTION"
    ANALYSIS = "ANALYSIS"
    DONE = "DONE"
    FAILED = "FAILED"


class Recovery(StrEnum):
    """What the run does when a phase's sub-timeout fires."""

    ABORT = "abort"
    SKIP_FORWARD = "skip_forward"
    FALLBACK = "fallback"


PHASES: tuple[PipelineState, ...] = (
    PipelineState.PREPROCESSING,
    PipelineState.DISCOVERY,
    PipelineState.ACCESS_EXTRACT,
    PipelineState.INTERACTION,
    PipelineState.ANALYSIS,
)

RECOVERY: dict[PipelineState, Recovery] = {
    PipelineState.PREPROCESSING: Recovery.ABORT,
    PipelineState.DISCOVERY: Recovery.SKIP_FORWARD,
    PipelineState.ACCESS_EXTRACT: Recovery.SKIP_FORWARD,
    PipelineState.INTERACTION: Recovery.SKIP_FORWARD,
    PipelineState.ANALYSIS: Recovery.FALLBACK,
}

# Progress reported on entering each phase; DONE reports 100.
PROGRESS: dict[PipelineState, int] = {
    PipelineState.PREPROCESSING: 10,
    PipelineState.DISCOVERY: 30,
    PipelineState.ACCESS_EXTRACT: 60,
    PipelineState.INTERACTION: 80,
    PipelineState.ANALYSIS: 95,
    PipelineState.DONE: 100,
}


@dataclass(frozen=True)
class PhaseBudgets:
    """Per-phase sub-timeouts and the global budget, all in seconds."""

    preprocess: float = 15.0
    discovery: float = 90.0
    access: float = 120.0
    interaction: float = 30.0
    analysis: float = 20.0
    total: float = 275.0
    min_start: float = 30.0

    def for_phase(self, state: PipelineState) -> float:
        return {
            PipelineState.PREPROCESSING: self.preprocess,
            PipelineState.DISCOVERY: self.discovery,
            PipelineState.ACCESS_EXTRACT: self.access,
            PipelineState.INTERACTION: self.interaction,
            PipelineState.ANALYSIS: self.analysis,
        }[state]


class Pipeline(Protocol):
    """Interface for claim-to-verdict pipelines."""

    async def run(
        self,
        claim: str,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        """Fact-check a claim.

        Args:
            claim: Validated claim text.
            on_progress: Called with 0-100 at fixed checkpoints.

        Returns:
            The fact-check result.
        """
        ...
