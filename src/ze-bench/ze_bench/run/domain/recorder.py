"""RunRecorder and BatchRecorder Protocols — persistence ports for runs and batches."""

from typing import Protocol

from ze_bench.batch.domain.batch import BatchDetails, BatchRecord, BatchStats
from ze_bench.evaluation.domain.context import EvaluatorResult
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.run.domain.run import RunMetadata, RunRecord, RunTelemetry
from ze_bench.scoring.domain.score import WeightedTotal
from ze_bench.tools.domain.oracle import QuestionAnswer


class RunRecorder(Protocol):
    """Stores run state. Writes to a run in a terminal state must be rejected."""

    def start_run(
        self, combination: BenchmarkCombination, batch_id: str | None = None
    ) -> RunRecord: ...

    def log_telemetry(
        self,
        run_id: str,
        telemetry: RunTelemetry,
        question_log: list[QuestionAnswer] | None = None,
    ) -> None: ...

    def log_evaluation(self, run_id: str, result: EvaluatorResult) -> None: ...

    def fail_run(self, run_id: str, stage: str, reason: str) -> None: ...

    def complete_run(
        self,
        run_id: str,
        total_score: float,
        weighted_total: WeightedTotal,
        metadata: RunMetadata,
    ) -> None: ...

    def mark_run_incomplete(self, run_id: str, reason: str) -> None: ...

    def get_run(self, run_id: str) -> RunRecord: ...


class BatchRecorder(Protocol):
    def start_batch(self) -> BatchRecord: ...

    def complete_batch(self, batch_id: str, stats: BatchStats) -> BatchRecord: ...

    def get_batch_details(self, batch_id: str) -> BatchDetails: ...
