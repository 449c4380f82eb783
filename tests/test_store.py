"""Tests for InMemoryRecordStore."""

import time

import pytest

from claimcheck.data import Evidence
from claimcheck.pipeline import degraded_result
from claimcheck.store import InMemoryRecordStore


async def test_record_lifecycle() -> None:
    """Should create, update and append to a record."""
    store = InMemoryRecordStore()
    record_id = await store.create_record("The earth is flat")

    result = degraded_result("The earth is flat", time.monotonic(), "offline")
    await store.update_record(record_id, result)
    await store.append_evidence(
        record_id,
        Evidence(url="https://a.example.com", title="A", content="text", source_name="a"),
    )

    record = store.get(record_id)
    assert record.claim == "The earth is flat"
    assert record.result is result
    assert [e.title for e in record.evidence] == ["A"]
    assert len(store) == 1


async def test_unknown_record() -> None:
    store = InMemoryRecordStore()
    with pytest.raises(KeyError):
        await store.update_record("missing", degraded_result("claim", time.monotonic(), "x"))
