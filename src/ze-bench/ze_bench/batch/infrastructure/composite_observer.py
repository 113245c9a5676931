"""CompositeBatchObserver — fans out all events to a list of observers."""

from ze_bench.batch.domain.observer import BatchObserver


class CompositeBatchObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from BatchObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[BatchObserver]) -> None:
        self._observers = observers

    def batch_scenario_skipped(self, suite: str, scenario: str, reason: str) -> None:
        for obs in self._observers:
            obs.batch_scenario_skipped(suite=suite, scenario=scenario, reason=reason)

    def batch_started(
        self,
        batch_id: str,
        total_runs: int,
        concurrency: int | None,
        agent_totals: dict[str, int],
    ) -> None:
        for obs in self._observers:
            obs.batch_started(
                batch_id=batch_id,
                total_runs=total_runs,
                concurrency=concurrency,
                agent_totals=agent_totals,
            )

    def batch_run_started(self, batch_id: str, label: str, agent_label: str) -> None:
        for obs in self._observers:
            obs.batch_run_started(
                batch_id=batch_id, label=label, agent_label=agent_label
            )

    def batch_run_finished(
        self,
        batch_id: str,
        label: str,
        agent_label: str,
        status: str,
        weighted: float | None,
    ) -> None:
        for obs in self._observers:
            obs.batch_run_finished(
                batch_id=batch_id,
                label=label,
                agent_label=agent_label,
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
        for obs in self._observers:
            obs.batch_completed(
                batch_id=batch_id,
                total_runs=total_runs,
                successful_runs=successful_runs,
                avg_weighted_score=avg_weighted_score,
                duration_ms=duration_ms,
            )
