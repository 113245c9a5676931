"""FakeValidationObserver — records validation domain events for assertion in tests."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommandStartedEvent:
    kind: str
    command: str


@dataclass(frozen=True)
class CommandCompletedEvent:
    kind: str
    exit_code: int


@dataclass(frozen=True)
class CommandTimedOutEvent:
    kind: str
    timeout_seconds: float


class FakeValidationObserver:
    def __init__(self) -> None:
        self.started: list[CommandStartedEvent] = []
        self.completed: list[CommandCompletedEvent] = []
        self.timed_out: list[CommandTimedOutEvent] = []
        self.spawn_failures: list[str] = []

    def validation_command_started(
        self, workspace_dir: Path, kind: str, command: str
    ) -> None:
        self.started.append(CommandStartedEvent(kind=kind, command=command))

    def validation_command_completed(
        self, workspace_dir: Path, kind: str, exit_code: int, duration_ms: int
    ) -> None:
        self.completed.append(CommandCompletedEvent(kind=kind, exit_code=exit_code))

    def validation_command_timed_out(
        self, workspace_dir: Path, kind: str, timeout_seconds: float
    ) -> None:
        self.timed_out.append(
            CommandTimedOutEvent(kind=kind, timeout_seconds=timeout_seconds)
        )

    def validation_command_spawn_failed(
        self, workspace_dir: Path, kind: str, reason: str
    ) -> None:
        self.spawn_failures.append(kind)
