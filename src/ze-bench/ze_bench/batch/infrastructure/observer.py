"""Structlog implementation of the BatchObserver port."""

import structlog


class StructlogBatchObserver:
    """Delegates batch domain events to structlog.

    Satisfies the BatchObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def batch_scenario_skipped(self, suite: str, scenario: str, reason: str) -> None:
        self._log.warning(
            "batch.scenario_skipped", suite=suite, scenario=scenario, reason=reason
        )

    def batch_started(
        self,
        batch_id: str,
        total_runs: int,
        concurrency: int | None,
        agent_totals: dict[str, int],
    ) -> None:
        self._log.info(
            "batch.started",
            batch_id=batch_id,
            total_runs=total_runs,
            concurrency=concurrency if concurrency is not None else "sequential",
            agents=sorted(agent_totals),
        )

    def batch_run_started(self, batch_id: str, label: str, agent_label: str) -> None:
        self._log.debug("batch.run_started", batch_id=batch_id, label=label)

    def batch_run_finished(
        self,
        batch_id: str,
        label: str,
        agent_label: str,
        status: str,
        weighted: float | None,
    ) -> None:
        self._log.info(
            "batch.run_finished",
            batch_id=batch_id,
            label=label,
            status=status,
            weighted=weighted,
        )

    def batch_completed(
        self,
        batch_id: str,
        total_runs: int,
        successful_runs: int,
        avg_weighted_score: float | None,
        duration_ms: int,
    ) -> None:
        self._log.info(
            "batch.completed",
            batch_id=batch_id,
            total_runs=total_runs,
            successful_runs=successful_runs,
            avg_weighted_score=avg_weighted_score,
            duration_ms=duration_ms,
        )
