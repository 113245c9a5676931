"""Structlog implementation of the HarnessObserver port."""

import structlog


class StructlogHarnessObserver:
    """Delegates harness lifecycle events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def harness_started(self, workspaces_root: str) -> None:
        self._log.debug("harness.started", workspaces_root=workspaces_root)

    def harness_stopped(self, abandoned_runs: int) -> None:
        self._log.debug("harness.stopped", abandoned_runs=abandoned_runs)

    def harness_interrupted(self, signal_name: str, active_runs: int) -> None:
        self._log.warning(
            "harness.interrupted", signal=signal_name, active_runs=active_runs
        )
