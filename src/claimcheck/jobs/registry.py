"""Short-lived map from claim hash to the job that is handling it."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Reservation:
    job_id: str
    reserved_at: float


class SubmissionRegistry:
    """Suppress duplicate submissions of the same claim within a time window.

    Lookups go through one ``asyncio.Lock``, so two concurrent submissions
    of the same claim can never both create a job. ``discard`` never awaits
    and so needs no lock.

    Args:
        window: Seconds during which a resubmission maps to the same job.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        window: float = 30.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window
        self._clock = clock
        self._lock = asyncio.Lock()
        self._reservations: dict[str, Reservation] = {}

    @property
    def window(self) -> float:
        return self._window

    def __len__(self) -> int:
        return len(self._reservations)

    async def lookup_or_reserve(
        self,
        key: str,
        new_job_id: Callable[[], str],
    ) -> tuple[str, bool]:
        """Return the job reserved for ``key``, reserving a new one if none is live.

        Args:
            key: Claim hash.
            new_job_id: Called under the lock to mint an id when a new job is needed.

        Returns:
            Tuple of (job id, whether a new reservation was made).
        """
        async with self._lock:
            self._purge_expired()
            existing = self._reservations.get(key)
            if existing is not None:
                return (existing.job_id, False)
            job_id = new_job_id()
            self._reservations[key] = Reservation(job_id=job_id, reserved_at=self._clock())
            return (job_id, True)

    async def purge_expired(self) -> int:
        """Drop reservations older than the window. Returns how many were dropped."""
        async with self._lock:
            return self._purge_expired()

    def _purge_expired(self) -> int:
        now = self._clock()
        expired = [k for k, r in self._reservations.items() if now - r.reserved_at >= self._window]
        for key in expired:
            del self._reservations[key]
        return len(expired)

    def discard(self, key: str, job_id: str) -> bool:
        """Drop the reservation for ``key`` if it still points at ``job_id``."""
        reservation = self._reservations.get(key)
        if reservation is None or reservation.job_id != job_id:
            return False
        del self._reservations[key]
        return True
