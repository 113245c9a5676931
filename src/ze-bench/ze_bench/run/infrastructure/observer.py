"""Structlog implementation of the RunObserver port."""

import structlog


class StructlogRunObserver:
    """Delegates run lifecycle events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(self, run_id: str, label: str, batch_id: str | None) -> None:
        self._log.info("run.started", run_id=run_id, label=label, batch_id=batch_id)

    def run_stage_entered(self, run_id: str, stage: str) -> None:
        self._log.debug("run.stage_entered", run_id=run_id, stage=stage)

    def run_degraded(self, run_id: str, stage: str, reason: str) -> None:
        self._log.warning("run.degraded", run_id=run_id, stage=stage, reason=reason)

    def run_failed(self, run_id: str, stage: str, reason: str) -> None:
        self._log.error("run.failed", run_id=run_id, stage=stage, reason=reason)

    def run_completed(
        self, run_id: str, label: str, weighted: float, duration_ms: int
    ) -> None:
        self._log.info(
            "run.completed",
            run_id=run_id,
            label=label,
            weighted=weighted,
            duration_ms=duration_ms,
        )
