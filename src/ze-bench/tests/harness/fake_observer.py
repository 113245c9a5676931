"""FakeHarnessObserver — records harness lifecycle events."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InterruptedEvent:
    signal_name: str
    active_runs: int


class FakeHarnessObserver:
    def __init__(self) -> None:
        self.started: list[str] = []
        self.stopped: list[int] = []
        self.interrupted: list[InterruptedEvent] = []

    def harness_started(self, workspaces_root: str) -> None:
        self.started.append(workspaces_root)

    def harness_stopped(self, abandoned_runs: int) -> None:
        self.stopped.append(abandoned_runs)

    def harness_interrupted(self, signal_name: str, active_runs: int) -> None:
        self.interrupted.append(
            InterruptedEvent(signal_name=signal_name, active_runs=active_runs)
        )
