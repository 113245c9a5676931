"""RunObserver port — lifecycle events of a single benchmark run."""

from typing import Protocol


class RunObserver(Protocol):
    def run_started(self, run_id: str, label: str, batch_id: str | None) -> None: ...

    def run_stage_entered(self, run_id: str, stage: str) -> None: ...

    def run_degraded(self, run_id: str, stage: str, reason: str) -> None: ...

    def run_failed(self, run_id: str, stage: str, reason: str) -> None: ...

    def run_completed(
        self, run_id: str, label: str, weighted: float, duration_ms: int
    ) -> None: ...
