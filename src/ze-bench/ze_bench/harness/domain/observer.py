"""HarnessObserver port — process-level lifecycle events."""

from typing import Protocol


class HarnessObserver(Protocol):
    def harness_started(self, workspaces_root: str) -> None: ...

    def harness_stopped(self, abandoned_runs: int) -> None: ...

    def harness_interrupted(self, signal_name: str, active_runs: int) -> None: ...
