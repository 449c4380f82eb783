"""Run logger for recording pipeline phases of each fact-check to JSON files."""

import dataclasses
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel

PhaseOutcome = Literal["ok", "timeout", "skipped", "failed"]

# Jobs run concurrently in separate tasks; each task sees its own run.
_current_run: ContextVar[str | None] = ContextVar("claimcheck_run_id", default=None)


class StageRecord(BaseModel):
    """Record of a single pipeline phase or component execution."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    outcome: PhaseOutcome = "ok"
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete fact-check run."""

    run_id: str
    pipeline_type: str
    claim: str
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    verdict: str | None = None
    confidence: int | None = None
    evidence_count: int = 0
    error: str | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, enums, lists, tuples, dicts and
    primitives.
    """
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _serialize(dataclasses.asdict(obj))
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Accumulates phase records and writes one JSON log file per run.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._records: dict[str, RunRecord] = {}
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def _current(self) -> RunRecord | None:
        run_id = _current_run.get()
        if run_id is None:
            return None
        return self._records.get(run_id)

    def start_run(self, pipeline_type: str, claim: str) -> None:
        """Initialize a new run record for the current task.

        Args:
            pipeline_type: Pipeline that handles the claim (e.g. "comprehensive").
            claim: The claim being checked.
        """
        if not self._enabled:
            return

        record = RunRecord(
            run_id=str(uuid.uuid4()),
            pipeline_type=pipeline_type,
            claim=claim,
            started_at=datetime.now(tz=UTC).isoformat(),
        )
        self._records[record.run_id] = record
        _current_run.set(record.run_id)

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        duration_seconds: float,
        outcome: PhaseOutcome = "ok",
    ) -> None:
        """Append a stage record to the current run.

        Args:
            stage: Phase name (e.g. "discovery", "access_extract").
            component: Component name.
            input_data: Phase input (will be serialized).
            output_data: Phase output summary (will be serialized).
            duration_seconds: Wall-clock time for this phase.
            outcome: How the phase ended.
        """
        record = self._current() if self._enabled else None
        if record is None:
            return

        record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                outcome=outcome,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self,
        result: Any = None,
        *,
        error: str | None = None,
    ) -> Path | None:
        """Write the current run record to a JSON file.

        Args:
            result: The FactCheckResult of the run, if one was produced.
            error: Failure message when no result was produced.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        record = self._current() if self._enabled else None
        if record is None:
            return None

        record.completed_at = datetime.now(tz=UTC).isoformat()
        record.error = error
        if result is not None:
            record.pipeline_type = result.pipeline
            record.verdict = str(result.verdict)
            record.confidence = result.confidence
            record.evidence_count = result.evidence_count

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_<id8>.json (colons -> dashes)
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}_{record.run_id[:8]}.json"

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        del self._records[record.run_id]
        _current_run.set(None)
        return filepath
