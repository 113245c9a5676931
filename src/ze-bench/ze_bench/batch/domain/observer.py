"""BatchObserver port — batch-level events in domain language."""

from typing import Protocol


class BatchObserver(Protocol):
    """Observer port emitting structured events while a batch runs.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def batch_scenario_skipped(self, suite: str, scenario: str, reason: str) -> None: ...

    def batch_started(
        self,
        batch_id: str,
        total_runs: int,
        concurrency: int | None,
        agent_totals: dict[str, int],
    ) -> None: ...

    def batch_run_started(self, batch_id: str, label: str, agent_label: str) -> None: ...

    def batch_run_finished(
        self,
        batch_id: str,
        label: str,
        agent_label: str,
        status: str,
        weighted: float | None,
    ) -> None: ...

    def batch_completed(
        self,
        batch_id: str,
        total_runs: int,
        successful_runs: int,
        avg_weighted_score: float | None,
        duration_ms: int,
    ) -> None: ...
