"""Persistence collaborator for fact-check records."""

from claimcheck.store.base import RecordStore
from claimcheck.store.memory import InMemoryRecordStore, StoredRecord

__all__ = ["InMemoryRecordStore", "RecordStore", "StoredRecord"]
