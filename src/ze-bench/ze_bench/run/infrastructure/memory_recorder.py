"""InMemoryRunRecorder — process-local store for runs and batches."""

import json
import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ze_bench.batch.domain.batch import (
    BatchDetails,
    BatchRecord,
    BatchStats,
    BatchStatus,
)
from ze_bench.evaluation.domain.context import EvaluatorResult
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.run.domain.run import (
    RunMetadata,
    RunRecord,
    RunStatus,
    RunTelemetry,
    StageFailure,
)
from ze_bench.run.infrastructure.errors import (
    RunFinalizedError,
    UnknownBatchError,
    UnknownRunError,
)
from ze_bench.scoring.domain.score import WeightedTotal
from ze_bench.tools.domain.oracle import QuestionAnswer


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryRunRecorder:
    """Satisfies both RunRecorder and BatchRecorder.

    Every mutation happens under one threading.Lock: the event loop is the
    usual writer, but signal handlers may mark runs incomplete concurrently.
    Runs in a terminal state reject all further writes with RunFinalizedError.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._runs: dict[str, RunRecord] = {}
        self._batches: dict[str, BatchRecord] = {}

    # ------------------------------------------------------------------
    # RunRecorder
    # ------------------------------------------------------------------

    def start_run(
        self, combination: BenchmarkCombination, batch_id: str | None = None
    ) -> RunRecord:
        """
        Raises:
            UnknownBatchError: if batch_id is given but was never started.
        """
        with self._lock:
            if batch_id is not None and batch_id not in self._batches:
                raise UnknownBatchError(batch_id=batch_id)
            record = RunRecord(
                run_id=str(uuid.uuid4()),
                combination=combination,
                batch_id=batch_id,
                status=RunStatus.RUNNING,
                started_at=self._clock(),
            )
            self._runs[record.run_id] = record
            if batch_id is not None:
                batch = self._batches[batch_id]
                self._batches[batch_id] = batch.model_copy(
                    update={"run_ids": [*batch.run_ids, record.run_id]}
                )
            return record

    def log_telemetry(
        self,
        run_id: str,
        telemetry: RunTelemetry,
        question_log: list[QuestionAnswer] | None = None,
    ) -> None:
        update: dict[str, Any] = {"telemetry": telemetry}
        if question_log is not None:
            update["question_log"] = list(question_log)
        self._update(run_id=run_id, update=update)

    def log_evaluation(self, run_id: str, result: EvaluatorResult) -> None:
        with self._lock:
            record = self._writable(run_id=run_id)
            self._runs[run_id] = record.model_copy(
                update={"evaluations": [*record.evaluations, result]}
            )

    def fail_run(self, run_id: str, stage: str, reason: str) -> None:
        self._update(
            run_id=run_id,
            update={
                "status": RunStatus.FAILED,
                "failure": StageFailure(stage=stage, reason=reason),
                "finished_at": self._clock(),
            },
        )

    def complete_run(
        self,
        run_id: str,
        total_score: float,
        weighted_total: WeightedTotal,
        metadata: RunMetadata,
    ) -> None:
        self._update(
            run_id=run_id,
            update={
                "status": RunStatus.COMPLETED,
                "total_score": total_score,
                "weighted_total": weighted_total,
                "score_card": dict(metadata.score_card),
                "command_log": list(metadata.command_log),
                "degraded_stages": list(metadata.degraded_stages),
                "diff": metadata.diff,
                "finished_at": self._clock(),
            },
        )

    def mark_run_incomplete(self, run_id: str, reason: str) -> None:
        self._update(
            run_id=run_id,
            update={
                "status": RunStatus.INCOMPLETE,
                "failure": StageFailure(stage="interrupted", reason=reason),
                "finished_at": self._clock(),
            },
        )

    def get_run(self, run_id: str) -> RunRecord:
        """
        Raises:
            UnknownRunError: if no run has this id.
        """
        with self._lock:
            return self._get(run_id=run_id)

    # ------------------------------------------------------------------
    # BatchRecorder
    # ------------------------------------------------------------------

    def start_batch(self) -> BatchRecord:
        started_at = self._clock()
        batch = BatchRecord(
            batch_id=f"batch-{started_at:%Y%m%dT%H%M%S}-{uuid.uuid4().hex[:8]}",
            started_at=started_at,
        )
        with self._lock:
            self._batches[batch.batch_id] = batch
        return batch

    def complete_batch(self, batch_id: str, stats: BatchStats) -> BatchRecord:
        """
        Raises:
            UnknownBatchError: if no batch has this id.
        """
        with self._lock:
            batch = self._get_batch(batch_id=batch_id)
            completed = batch.model_copy(
                update={
                    "status": BatchStatus.COMPLETED,
                    "stats": stats,
                    "finished_at": self._clock(),
                }
            )
            self._batches[batch_id] = completed
            return completed

    def get_batch_details(self, batch_id: str) -> BatchDetails:
        """
        Raises:
            UnknownBatchError: if no batch has this id.
        """
        with self._lock:
            batch = self._get_batch(batch_id=batch_id)
            runs = [self._runs[run_id] for run_id in batch.run_ids]
            return BatchDetails(batch=batch, runs=runs)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_batch(
        self, batch_id: str, output_dir: Path, extra: dict[str, Any] | None = None
    ) -> tuple[Path, Path]:
        """Write ``<batch_id>.json`` (batch + extra) and ``<batch_id>.runs.jsonl``.

        Returns the two paths written.

        Raises:
            UnknownBatchError: if no batch has this id.
        """
        details = self.get_batch_details(batch_id=batch_id)
        output_dir.mkdir(parents=True, exist_ok=True)

        batch_path = output_dir / f"{batch_id}.json"
        payload = {**details.batch.model_dump(mode="json"), **(extra or {})}
        batch_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

        runs_path = output_dir / f"{batch_id}.runs.jsonl"
        with open(runs_path, "w", encoding="utf-8") as fh:
            for run in details.runs:
                fh.write(run.model_dump_json() + "\n")

        return batch_path, runs_path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _update(self, run_id: str, update: dict[str, Any]) -> None:
        with self._lock:
            record = self._writable(run_id=run_id)
            self._runs[run_id] = record.model_copy(update=update)

    def _writable(self, run_id: str) -> RunRecord:
        # Caller holds self._lock.
        record = self._get(run_id=run_id)
        if record.status.is_terminal:
            raise RunFinalizedError(run_id=run_id, status=record.status.value)
        return record

    def _get(self, run_id: str) -> RunRecord:
        record = self._runs.get(run_id)
        if record is None:
            raise UnknownRunError(run_id=run_id)
        return record

    def _get_batch(self, batch_id: str) -> BatchRecord:
        batch = self._batches.get(batch_id)
        if batch is None:
            raise UnknownBatchError(batch_id=batch_id)
        return batch
