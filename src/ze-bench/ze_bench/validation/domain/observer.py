"""ValidationObserver port — domain events emitted while validation commands run."""

from pathlib import Path
from typing import Protocol


class ValidationObserver(Protocol):
    def validation_command_started(
        self, workspace_dir: Path, kind: str, command: str
    ) -> None: ...

    def validation_command_completed(
        self, workspace_dir: Path, kind: str, exit_code: int, duration_ms: int
    ) -> None: ...

    def validation_command_timed_out(
        self, workspace_dir: Path, kind: str, timeout_seconds: float
    ) -> None: ...

    def validation_command_spawn_failed(
        self, workspace_dir: Path, kind: str, reason: str
    ) -> None: ...
