"""Tests for SubmissionRegistry."""

import asyncio
import itertools

from claimcheck.jobs import SubmissionRegistry


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _ids():
    counter = itertools.count(1)
    return lambda: f"job-{next(counter)}"


async def test_same_key_within_window_reuses_job() -> None:
    """Should reuse the reservation inside the window."""
    clock = FakeClock()
    registry = SubmissionRegistry(30.0, clock=clock)
    new_id = _ids()

    first = await registry.lookup_or_reserve("abc", new_id)
    clock.now = 29.9
    second = await registry.lookup_or_reserve("abc", new_id)

    assert first == ("job-1", True)
    assert second == ("job-1", False)


async def test_same_key_after_window_gets_new_job() -> None:
    clock = FakeClock()
    registry = SubmissionRegistry(30.0, clock=clock)
    new_id = _ids()

    await registry.lookup_or_reserve("abc", new_id)
    clock.now = 30.0
    job_id, created = await registry.lookup_or_reserve("abc", new_id)

    assert (job_id, created) == ("job-2", True)


async def test_different_keys_are_independent() -> None:
    registry = SubmissionRegistry(30.0, clock=FakeClock())
    new_id = _ids()
    a = await registry.lookup_or_reserve("a", new_id)
    b = await registry.lookup_or_reserve("b", new_id)
    assert a[0] != b[0]
    assert len(registry) == 2


async def test_purge_expired() -> None:
    clock = FakeClock()
    registry = SubmissionRegistry(10.0, clock=clock)
    new_id = _ids()
    await registry.lookup_or_reserve("a", new_id)
    clock.now = 5.0
    await registry.lookup_or_reserve("b", new_id)
    clock.now = 12.0

    assert await registry.purge_expired() == 1
    assert len(registry) == 1


async def test_concurrent_submissions_create_one_job() -> None:
    """Should reserve once for concurrent submissions of one key."""
    registry = SubmissionRegistry(30.0)
    new_id = _ids()

    results = await asyncio.gather(*(registry.lookup_or_reserve("same", new_id) for _ in range(20)))

    assert {job_id for job_id, _ in results} == {"job-1"}
    assert sum(1 for _, created in results if created) == 1


async def test_discard_only_matching_job() -> None:
    """Should drop a reservation only for the job that holds it."""
    registry = SubmissionRegistry(30.0)
    job_id, _ = await registry.lookup_or_reserve("abc", _ids())

    assert registry.discard("abc", "someone-else") is False
    assert len(registry) == 1
    assert registry.discard("abc", job_id) is True
    assert len(registry) == 0
    assert registry.discard("abc", job_id) is False
