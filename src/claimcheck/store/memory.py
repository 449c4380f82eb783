import uuid
from dataclasses import dataclass, field

from claimcheck.data import Evidence, FactCheckResult


@dataclass
class StoredRecord:
    record_id: str
    claim: str
    result: FactCheckResult | None = None
    evidence: list[Evidence] = field(default_factory=list)


class InMemoryRecordStore:
    """Record store that keeps everything in process memory."""

    def __init__(self) -> None:
        self._records: dict[str, StoredRecord] = {}

    def get(self, record_id: str) -> StoredRecord:
        return self._records[record_id]

    def __len__(self) -> int:
        return len(self._records)

    async def create_record(self, claim: str) -> str:
        record_id = str(uuid.uuid4())
        self._records[record_id] = StoredRecord(record_id=record_id, claim=claim)
        return record_id

    async def update_record(self, record_id: str, result: FactCheckResult) -> None:
        self._records[record_id].result = result

    async def append_evidence(self, record_id: str, evidence: Evidence) -> None:
        self._records[record_id].evidence.append(evidence)
