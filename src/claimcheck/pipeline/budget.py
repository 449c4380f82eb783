"""Wall-clock budget shared by the phases of one pipeline run."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from claimcheck.errors import BudgetExhaustedError, PhaseTimeoutError

T = TypeVar("T")


class TimeBudget:
    """A global deadline measured on a monotonic clock.

    Args:
        total: Seconds available for the whole run.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(self, total: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._total = total
        self._clock = clock
        self._started_at = clock()

    @property
    def total(self) -> float:
        return self._total

    @property
    def started_at(self) -> float:
        return self._started_at

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started_at

    @property
    def remaining(self) -> float:
        return max(0.0, self._total - self.elapsed)

    @property
    def exceeded(self) -> bool:
        return self.elapsed >= self._total

    def ensure(self, phase: str, minimum: float) -> None:
        """Raise BudgetExhaustedError unless at least ``minimum`` seconds remain."""
        remaining = self.remaining
        if remaining < minimum:
            raise BudgetExhaustedError(phase, remaining)

    def sub_timeout(self, phase_timeout: float) -> float:
        """The phase's own timeout, shortened to what is left of the budget."""
        return min(phase_timeout, self.remaining)


async def run_phase(phase: str, aw: Awaitable[T], timeout: float) -> T:
    """Race ``aw`` against ``timeout``.

    Raises:
        PhaseTimeoutError: If the timeout fires first; ``aw`` is cancelled.
    """
    try:
        return await asyncio.wait_for(aw, timeout=timeout)
    except TimeoutError as e:
        raise PhaseTimeoutError(phase, timeout) from e
