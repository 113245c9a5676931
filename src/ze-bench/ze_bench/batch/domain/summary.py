"""BatchSummary — what a finished batch hands back to its caller."""

from pydantic import BaseModel, Field

from ze_bench.batch.domain.analytics import BatchAnalytics
from ze_bench.batch.domain.batch import BatchRecord
from ze_bench.batch.domain.selection import BatchSelection
from ze_bench.run.domain.run import RunRecord


class BatchSummary(BaseModel, frozen=True):
    batch: BatchRecord
    selection: BatchSelection
    concurrency: int | None
    runs: list[RunRecord]
    analytics: BatchAnalytics = Field(default_factory=BatchAnalytics)
