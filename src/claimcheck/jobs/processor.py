"""Job body: run the pipelines for one claim and persist the outcome."""

import asyncio
import logging
import time
from typing import Protocol

from claimcheck.data import FactCheckResult
from claimcheck.errors import PipelineFailedError
from claimcheck.pipeline import Pipeline, ProgressCallback
from claimcheck.run_logger import RunLogger
from claimcheck.store import RecordStore

logger = logging.getLogger(__name__)

RECORD_CREATED_PROGRESS = 20
MAX_PIPELINE_PROGRESS = 95


def job_progress(pipeline_progress: int) -> int:
    """Map pipeline progress (0-100) onto the 20-95 band of job progress."""
    return min(round(RECORD_CREATED_PROGRESS + pipeline_progress * 0.8), MAX_PIPELINE_PROGRESS)


class JobProcessor(Protocol):
    """Interface for the work a job slot executes."""

    async def process(
        self,
        claim: str,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        ...


class FactCheckProcessor:
    """Run the comprehensive pipeline, falling back to the simplified one.

    Flow:
    1. Create the persisted record (progress 10, then 20)
    2. Run the comprehensive pipeline, reporting ``20 + 0.8 * p`` capped at 95
    3. On any exception, run the simplified pipeline instead
    4. Persist the result and each Evidence item; persistence failures are
       logged, never fatal
    5. Report 100

    Args:
        comprehensive: Primary pipeline.
        simplified: Fallback pipeline.
        store: Persistence collaborator.
        run_logger: Optional RunLogger; one run record per processed claim.
    """

    def __init__(
        self,
        comprehensive: Pipeline,
        simplified: Pipeline,
        store: RecordStore,
        *,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._comprehensive = comprehensive
        self._simplified = simplified
        self._store = store
        self._run_logger = run_logger

    async def process(
        self,
        claim: str,
        on_progress: ProgressCallback | None = None,
    ) -> FactCheckResult:
        """Fact-check ``claim`` and persist the result.

        Raises:
            PipelineFailedError: If neither pipeline produced a result.
        """

        def report(progress: int) -> None:
            if on_progress:
                on_progress(progress)

        def report_pipeline(progress: int) -> None:
            report(job_progress(progress))

        t0 = time.monotonic()
        if self._run_logger:
            self._run_logger.start_run("comprehensive", claim)
        try:
            report(10)
            record_id = await self._create_record(claim)
            report(RECORD_CREATED_PROGRESS)
            result = await self._run_pipelines(claim, report_pipeline)
            if record_id is not None:
                await self._persist(record_id, result)
        except asyncio.CancelledError:
            if self._run_logger:
                self._run_logger.finish_run(error="Job cancelled")
            raise
        except Exception as e:
            if self._run_logger:
                self._run_logger.finish_run(error=str(e))
            raise

        if self._run_logger:
            self._run_logger.finish_run(result)
        report(100)
        logger.info(
            f"[FACT-CHECK] {result.pipeline} fact-check completed in "
            f"{time.monotonic() - t0:.1f}s: {result.verdict} ({result.confidence}%)"
        )
        return result

    async def _run_pipelines(
        self,
        claim: str,
        on_progress: ProgressCallback,
    ) -> FactCheckResult:
        try:
            return await self._comprehensive.run(claim, on_progress)
        except Exception as comprehensive_error:
            logger.warning(
                f"[FACT-CHECK] Comprehensive analysis failed, using simplified. "
                f"Error: {comprehensive_error}"
            )
            try:
                return await self._simplified.run(claim, on_progress)
            except Exception as e:
                raise PipelineFailedError(
                    f"Both pipelines failed: {comprehensive_error}; {e}"
                ) from e

    async def _create_record(self, claim: str) -> str | None:
        try:
            return await self._store.create_record(claim)
        except Exception as e:
            logger.error(f"[FACT-CHECK] Could not create record, result will not be persisted. Error: {e}")
            return None

    async def _persist(self, record_id: str, result: FactCheckResult) -> None:
        try:
            await self._store.update_record(record_id, result)
        except Exception as e:
            logger.error(f"[FACT-CHECK] Failed to store result for record {record_id}. Error: {e}")

        evidence = result.all_evidence()
        outcomes = await asyncio.gather(
            *(self._store.append_evidence(record_id, e) for e in evidence),
            return_exceptions=True,
        )
        stored = 0
        for item, outcome in zip(evidence, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"[FACT-CHECK] Failed to store evidence from {item.source_name}. Error: {outcome}"
                )
            else:
                stored += 1
        logger.info(f"[FACT-CHECK] Stored {stored}/{len(evidence)} evidence records")
