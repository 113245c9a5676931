"""Structlog implementation of the ValidationObserver port."""

from pathlib import Path

import structlog


class StructlogValidationObserver:
    """Delegates validation domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def validation_command_started(
        self, workspace_dir: Path, kind: str, command: str
    ) -> None:
        self._log.info(
            "validation.command_started",
            workspace_dir=str(workspace_dir),
            kind=kind,
            command=command,
        )

    def validation_command_completed(
        self, workspace_dir: Path, kind: str, exit_code: int, duration_ms: int
    ) -> None:
        self._log.info(
            "validation.command_completed",
            workspace_dir=str(workspace_dir),
            kind=kind,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    def validation_command_timed_out(
        self, workspace_dir: Path, kind: str, timeout_seconds: float
    ) -> None:
        self._log.warning(
            "validation.command_timed_out",
            workspace_dir=str(workspace_dir),
            kind=kind,
            timeout_seconds=timeout_seconds,
        )

    def validation_command_spawn_failed(
        self, workspace_dir: Path, kind: str, reason: str
    ) -> None:
        self._log.error(
            "validation.command_spawn_failed",
            workspace_dir=str(workspace_dir),
            kind=kind,
            reason=reason,
        )
