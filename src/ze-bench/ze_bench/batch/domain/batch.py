"""Batch value objects — a group of runs launched together and their statistics."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from ze_bench.run.domain.run import RunRecord


class BatchStatus(StrEnum):
    OPEN = "open"
    COMPLETED = "completed"


class BatchStats(BaseModel, frozen=True):
    """Aggregates over a batch. Averages consider completed runs only."""

    total_runs: int = 0
    successful_runs: int = 0
    avg_score: float | None = None
    avg_weighted_score: float | None = None
    duration_ms: int = 0


class BatchRecord(BaseModel, frozen=True):
    batch_id: str
    status: BatchStatus = BatchStatus.OPEN
    started_at: datetime
    finished_at: datetime | None = None
    run_ids: list[str] = Field(default_factory=list)
    stats: BatchStats | None = None


class BatchDetails(BaseModel, frozen=True):
    batch: BatchRecord
    runs: list[RunRecord]
