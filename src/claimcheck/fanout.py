"""Bounded concurrent fan-out with per-item and overall timeouts."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class FanOutResult(Generic[T]):
    """What a fan-out collected before it settled or ran out of time.

    ``results`` holds ``(index, value)`` pairs of the successful items in
    submission order.
    """

    results: list[tuple[int, T]] = field(default_factory=list)
    failed: int = 0
    cancelled: int = 0

    @property
    def timed_out(self) -> bool:
        return self.cancelled > 0

    def values(self) -> list[T]:
        return [value for _, value in self.results]


async def _bounded(aw: Awaitable[T], timeout: float | None) -> T:
    if timeout is None:
        return await aw
    return await asyncio.wait_for(aw, timeout)


async def fan_out(
    awaitables: Sequence[Awaitable[T]],
    *,
    timeout: float | None = None,
    item_timeout: float | None = None,
    labels: Sequence[str] | None = None,
) -> FanOutResult[T]:
    """Run awaitables concurrently and keep whatever finishes in time.

    Each item is bounded by ``item_timeout``; the whole fan-out by
    ``timeout``. Items still running when ``timeout`` fires are cancelled
    and contribute nothing. Item failures (including item timeouts) are
    logged and counted, never raised.

    Args:
        awaitables: Work items.
        timeout: Overall deadline in seconds, or None for no deadline.
        item_timeout: Per-item deadline in seconds, or None.
        labels: Optional names used in log messages, parallel to ``awaitables``.

    Returns:
        FanOutResult with successful values in submission order.
    """
    outcome: FanOutResult[T] = FanOutResult()
    if not awaitables:
        return outcome

    names = list(labels) if labels is not None else [str(i) for i in range(len(awaitables))]
    tasks = [asyncio.ensure_future(_bounded(aw, item_timeout)) for aw in awaitables]
    try:
        _, pending = await asyncio.wait(tasks, timeout=timeout)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    for task in pending:
        task.cancel()
    outcome.cancelled = len(pending)
    if pending:
        logger.warning(f"Fan-out deadline of {timeout}s hit, cancelled {len(pending)} item(s)")

    for index, task in enumerate(tasks):
        if task in pending:
            continue
        if task.cancelled():
            outcome.cancelled += 1
            continue
        error = task.exception()
        if error is not None:
            outcome.failed += 1
            if isinstance(error, TimeoutError):
                logger.warning(f"{names[index]} timed out after {item_timeout}s")
            else:
                logger.warning(f"{names[index]} failed. Error: {error}")
            continue
        outcome.results.append((index, task.result()))

    return outcome
