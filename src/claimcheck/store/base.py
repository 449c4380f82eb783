"""Protocol for persisting fact-check records."""

from typing import Protocol

from claimcheck.data import Evidence, FactCheckResult


class RecordStore(Protocol):
    """Interface for the persistence collaborator."""

    async def create_record(self, claim: str) -> str:
        """Create a record for a claim and return its id."""
        ...

    async def update_record(self, record_id: str, result: FactCheckResult) -> None:
        """Attach the final result to a record."""
        ...

    async def append_evidence(self, record_id: str, evidence: Evidence) -> None:
        """Persist one evidence item under a record."""
        ...
