"""Job admission: duplicate suppression, worker slots and status polling."""

import asyncio
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field

from claimcheck.data import FactCheckResult, JobState, JobStatus
from claimcheck.jobs.claims import claim_hash, validate_claim
from claimcheck.jobs.processor import JobProcessor
from claimcheck.jobs.registry import SubmissionRegistry

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    job_id: str
    claim: str
    claim_hash: str
    state: JobState = JobState.WAITING
    progress: int = 0
    result: FactCheckResult | None = None
    error: str | None = None
    task: asyncio.Task[None] | None = field(default=None, repr=False)

    def status(self) -> JobStatus:
        return JobStatus(
            job_id=self.job_id,
            state=self.state,
            progress=self.progress,
            result=self.result,
            error=self.error,
        )


class JobAdmission:
    """Accept claims, run each in a worker slot, and expose job status.

    - A resubmission of the same normalized claim within ``dedup_window``
      seconds returns the existing job id instead of starting a new run.
    - At most ``slots`` jobs run at once; the rest stay ``waiting``.
    - Failed jobs are never retried.
    - A job still running after ``max_runtime`` seconds is cancelled and
      marked ``failed``.
    - Only the newest ``retain_completed`` completed and ``retain_failed``
      failed jobs stay queryable; older ones are forgotten.

    Args:
        processor: Work executed for each job.
        slots: Number of concurrently running jobs.
        dedup_window: Duplicate-suppression window in seconds.
        max_runtime: Hard bound on one job's run time, or None.
        retain_completed: Completed jobs kept for status polling.
        retain_failed: Failed jobs kept for status polling.
        registry: Submission registry; one is created when omitted.
    """

    def __init__(
        self,
        processor: JobProcessor,
        *,
        slots: int = 2,
        dedup_window: float = 30.0,
        max_runtime: float | None = None,
        retain_completed: int = 5,
        retain_failed: int = 10,
        registry: SubmissionRegistry | None = None,
    ) -> None:
        self._processor = processor
        self._slots = asyncio.Semaphore(slots)
        self._max_runtime = max_runtime
        self._registry = registry or SubmissionRegistry(dedup_window)
        self._jobs: dict[str, _Job] = {}
        self._retain = {JobState.COMPLETED: retain_completed, JobState.FAILED: retain_failed}
        self._finished: dict[JobState, deque[str]] = {state: deque() for state in self._retain}

    def __len__(self) -> int:
        return len(self._jobs)

    async def submit(self, claim: str) -> str:
        """Validate a claim and start (or join) a job for it.

        Raises:
            ClaimValidationError: If the claim is rejected; no job is created.
        """
        validated = validate_claim(claim)
        key = claim_hash(validated)
        job_id, created = await self._registry.lookup_or_reserve(key, lambda: str(uuid.uuid4()))
        if not created:
            logger.info(f"[QUEUE] Duplicate submission, reusing job {job_id}")
            return job_id

        job = _Job(job_id=job_id, claim=validated, claim_hash=key)
        self._jobs[job_id] = job
        job.task = asyncio.create_task(self._execute(job), name=f"fact-check-{job_id}")
        logger.info(f"[QUEUE] Fact-check job {job_id} is waiting")
        return job_id

    def status(self, job_id: str) -> JobStatus:
        """Current status of a job.

        Raises:
            KeyError: If no job with this id exists.
        """
        job = self._jobs.get(job_id)
        if job is None:
            raise KeyError(f"Unknown job: {job_id}")
        return job.status()

    async def wait(self, job_id: str, timeout: float | None = None) -> JobStatus:
        """Wait until a job finishes (or ``timeout`` passes) and return its status."""
        job = self._jobs.get(job_id)
        if job is None:
            raise KeyError(f"Unknown job: {job_id}")
        if job.task is not None:
            await asyncio.wait([job.task], timeout=timeout)
        return job.status()

    async def shutdown(self) -> None:
        """Cancel every unfinished job and wait for the cancellations to settle."""
        pending = [j.task for j in self._jobs.values() if j.task is not None and not j.task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"[QUEUE] Cancelled {len(pending)} unfinished job(s)")

    async def _execute(self, job: _Job) -> None:
        try:
            await self._run_in_slot(job)
        except asyncio.CancelledError:
            job.state = JobState.FAILED
            job.error = "Job cancelled"
            raise
        finally:
            self._retire(job)

    def _retire(self, job: _Job) -> None:
        finished = self._finished.get(job.state)
        if finished is None:
            return
        finished.append(job.job_id)
        while len(finished) > self._retain[job.state]:
            evicted = self._jobs.pop(finished.popleft())
            self._registry.discard(evicted.claim_hash, evicted.job_id)
            logger.debug(f"[QUEUE] Forgot {evicted.state} job {evicted.job_id}")

    async def _run_in_slot(self, job: _Job) -> None:
        async with self._slots:
            job.state = JobState.ACTIVE
            logger.info(f"[QUEUE] Fact-check job {job.job_id} started processing")

            def on_progress(progress: int) -> None:
                job.progress = max(job.progress, progress)

            try:
                job.result = await asyncio.wait_for(
                    self._processor.process(job.claim, on_progress),
                    timeout=self._max_runtime,
                )
            except TimeoutError:
                job.state = JobState.FAILED
                job.error = f"Job exceeded maximum runtime of {self._max_runtime}s"
                logger.error(f"[QUEUE] Fact-check job {job.job_id} failed: {job.error}")
                return
            except Exception as e:
                job.state = JobState.FAILED
                job.error = str(e)
                logger.error(f"[QUEUE] Fact-check job {job.job_id} failed: {e}")
                return

            job.state = JobState.COMPLETED
            job.progress = 100
            logger.info(
                f"[QUEUE] Fact-check job {job.job_id} completed: "
                f"{job.result.verdict} ({job.result.confidence}%)"
            )
