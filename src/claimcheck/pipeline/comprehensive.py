"""Comprehensive five-phase fact-check pipeline."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from claimcheck.access import AccessExtractionEngine
from claimcheck.data import (
    Analysis,
    DiscoveryCandidate,
    Evidence,
    FactCheckResult,
    PreprocessedClaim,
)
from claimcheck.errors import BudgetExhaustedError, PhaseTimeoutError
from claimcheck.interaction import DynamicInteractionStage
from claimcheck.pipeline.base import (
    PHASES,
    PROGRESS,
    RECOVERY,
    PhaseBudgets,
    PipelineState,
    ProgressCallback,
    Recovery,
)
from claimcheck.pipeline.budget import TimeBudget, run_phase
from claimcheck.preprocess import preprocess_claim
from claimcheck.run_logger import PhaseOutcome, RunLogger
from claimcheck.search import DiscoveryFanOut
from claimcheck.synthesis import Synthesizer, fallback_analysis

logger = logging.getLogger(__name__)

# Components enforce the phase timeout themselves; the race only catches overruns.
DEFAULT_PHASE_GRACE = 1.0


@dataclass
class PipelineRun:
    """State of one comprehensive run: the state machine plus phase outputs."""

    claim: str
    budget: TimeBudget
    state: PipelineState = PipelineState.INITIALIZING
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.INITIALIZING])
    outcomes: dict[PipelineState, PhaseOutcome] = field(default_factory=dict)
    preprocessed: PreprocessedClaim | None = None
    candidates: list[DiscoveryCandidate] = field(default_factory=list)
    evidence: list[Evidence] = field(default_factory=list)
    analysis: Analysis | None = None

    @property
    def placeholders_discarded(self) -> int:
        return sum(1 for c in self.candidates if c.is_placeholder)

    def transition(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)


class ComprehensivePipeline:
    """Preprocess, discover, extract, interact and analyze under one time budget.

    The run is an explicit state machine over ``PipelineState``. Before each
    phase the global budget is checked; each phase then races its own
    sub-timeout. When a sub-timeout fires, ``RECOVERY`` decides what happens:

    - PREPROCESSING aborts the run with ``PhaseTimeoutError``
    - DISCOVERY, ACCESS_EXTRACT and INTERACTION skip forward with the data
      gathered so far
    - ANALYSIS falls back to the rule-based verdict

    ``BudgetExhaustedError`` and ``PhaseTimeoutError`` from preprocessing
    reach the caller, which is expected to fall back to the simplified
    pipeline.

    Args:
        discovery: Discovery fan-out over all source adapters.
        engine: Access & extraction engine.
        interaction: Dynamic interaction stage, or None to skip the phase.
        synthesizer: Verdict synthesizer.
        budgets: Phase sub-timeouts and global budget.
        run_logger: Optional RunLogger for per-phase records.
        phase_grace: Slack added to each phase race beyond its sub-timeout.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        discovery: DiscoveryFanOut,
        engine: AccessExtractionEngine,
        interaction: DynamicInteractionStage | None,
        synthesizer: Synthesizer,
        *,
        budgets: PhaseBudgets | None = None,
        run_logger: RunLogger | None = None,
        phase_grace: float = DEFAULT_PHASE_GRACE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._discovery = discovery
        self._engine = engine
        self._interaction = interaction
        self._synthesizer = synthesizer
        self._budgets = budgets or PhaseBudgets()
        self._run_logger = run_logger
        self._phase_grace = phase_grace
        self._clock = clock
        self._handlers: dict[PipelineState, Callable[[PipelineRun, float], Awaitable[bool]]] = {
            PipelineState.PREPROCESSING: self._preprocess,
            PipelineState.DISCOVERY: self._discover,
            PipelineState.ACCESS_EXTRACT: self._access,
            PipelineState.INTERACTION: self._interact,
            PipelineState.ANALYSIS: self._analyze,
        }

    def new_run(self, claim: str) -> PipelineRun:
        return PipelineRun(claim=claim, budget=TimeBudget(self._budgets.total, clock=self._clock))

    async def run(
        self,
        claim: str,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        return await self.execute(self.new_run(claim), on_progress)

    async def execute(
        self,
        run: PipelineRun,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        """Drive ``run`` through every phase and build the result.

        Raises:
            BudgetExhaustedError: Too little budget to start, or the budget
                ran out between phases.
            PhaseTimeoutError: Preprocessing overran its sub-timeout.
        """
        logger.info(f"[PIPELINE] Starting comprehensive fact-check for: {run.claim[:50]}")
        try:
            run.budget.ensure(PipelineState.INITIALIZING, self._budgets.min_start)
            for phase in PHASES:
                await self._run_phase(run, phase, on_progress)
        except Exception as e:
            run.transition(PipelineState.FAILED)
            logger.error(f"[PIPELINE] Comprehensive run failed in {run.history[-2]}. Error: {e}")
            raise

        assert run.analysis is not None
        result = self._synthesizer.build_result(
            run.evidence,
            run.analysis,
            run.budget.started_at,
            pipeline="comprehensive",
            placeholders_discarded=run.placeholders_discarded,
        )
        run.transition(PipelineState.DONE)
        if on_progress:
            on_progress(PROGRESS[PipelineState.DONE])
        logger.info(
            f"[PIPELINE] Completed in {result.processing_time:.1f}s: "
            f"{result.verdict} ({result.confidence}%) from {result.evidence_count} evidence item(s)"
        )
        return result

    async def _run_phase(
        self,
        run: PipelineRun,
        phase: PipelineState,
        on_progress: ProgressCallback | None,
    ) -> None:
        run.transition(phase)
        if run.budget.exceeded:
            raise BudgetExhaustedError(phase, run.budget.remaining)
        if on_progress:
            on_progress(PROGRESS[phase])

        timeout = run.budget.sub_timeout(self._budgets.for_phase(phase))
        t0 = time.monotonic()
        outcome: PhaseOutcome = "ok"
        try:
            handler = self._handlers[phase](run, timeout)
            timed_out = await run_phase(phase, handler, timeout + self._phase_grace)
            if timed_out:
                outcome = "timeout"
        except PhaseTimeoutError as e:
            outcome = "timeout"
            policy = RECOVERY[phase]
            if policy is Recovery.ABORT:
                self._log_phase(run, phase, "failed", time.monotonic() - t0)
                raise
            logger.warning(f"[{phase}] {e}; continuing with partial data ({policy})")
            if policy is Recovery.FALLBACK:
                run.analysis = fallback_analysis(run.claim, run.evidence)

        run.outcomes[phase] = outcome
        self._log_phase(run, phase, outcome, time.monotonic() - t0)

    def _phase_summary(self, run: PipelineRun, phase: PipelineState) -> Any:
        if phase is PipelineState.PREPROCESSING:
            return run.preprocessed
        if phase is PipelineState.DISCOVERY:
            return {
                "candidate_count": len(run.candidates),
                "placeholder_count": run.placeholders_discarded,
            }
        if phase is PipelineState.ANALYSIS and run.analysis is not None:
            return {
                "verdict": run.analysis.verdict,
                "confidence": run.analysis.confidence,
                "used_fallback": run.analysis.used_fallback,
            }
        return {"evidence_count": len(run.evidence)}

    def _log_phase(
        self,
        run: PipelineRun,
        phase: PipelineState,
        outcome: PhaseOutcome,
        duration: float,
    ) -> None:
        logger.info(f"[{phase}] {outcome} in {duration:.1f}s")
        if self._run_logger:
            self._run_logger.log_stage(
                stage=phase.lower(),
                component=type(self).__name__,
                input_data={"remaining_budget": round(run.budget.remaining, 2)},
                output_data=self._phase_summary(run, phase),
                duration_seconds=duration,
                outcome=outcome,
            )

    # === Phase handlers: each returns whether its own deadline fired ===

    async def _preprocess(self, run: PipelineRun, timeout: float) -> bool:
        run.preprocessed = await asyncio.to_thread(preprocess_claim, run.claim)
        logger.info(
            f"[PREPROCESSING] {run.preprocessed.claim_type} claim, "
            f"{len(run.preprocessed.keywords)} keyword(s), "
            f"{len(run.preprocessed.search_variations)} search variation(s)"
        )
        return False

    async def _discover(self, run: PipelineRun, timeout: float) -> bool:
        assert run.preprocessed is not None
        run.candidates, timed_out = await self._discovery.run(
            run.preprocessed.to_terms(), timeout=timeout
        )
        return timed_out

    async def _access(self, run: PipelineRun, timeout: float) -> bool:
        run.evidence, timed_out = await self._engine.run(run.candidates, timeout=timeout)
        return timed_out

    async def _interact(self, run: PipelineRun, timeout: float) -> bool:
        if self._interaction is None:
            return False
        # Merges happen in place, so a timeout here keeps what already landed.
        _, timed_out = await self._interaction.run(run.evidence, timeout=timeout)
        return timed_out

    async def _analyze(self, run: PipelineRun, timeout: float) -> bool:
        run.analysis = await self._synthesizer.analyze(run.claim, run.evidence, timeout=timeout)
        return False
