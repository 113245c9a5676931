"""ValidationRunner — executes a scenario's declared shell commands in a workspace."""

import os
import time
from collections.abc import Mapping
from pathlib import Path

from ze_bench.core.process import communicate_within, spawn_shell
from ze_bench.validation.domain.command import (
    EXECUTION_ORDER,
    CommandKind,
    CommandResult,
)
from ze_bench.validation.domain.observer import ValidationObserver
from ze_bench.validation.infrastructure.errors import ValidationExecError

DEFAULT_TIMEOUT_SECONDS = 10 * 60


class ValidationRunner:
    """Runs declared commands sequentially, in the fixed kind order.

    A failing command never prevents the next one from running, and no command
    raises: spawn failures and timeouts are folded into the CommandResult.
    """

    def __init__(
        self,
        observer: ValidationObserver,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._observer = observer
        self._timeout_seconds = timeout_seconds

    async def run(
        self,
        workspace_dir: Path,
        commands: Mapping[CommandKind, str] | None,
    ) -> list[CommandResult]:
        """Execute every declared command and return one result per command run."""
        if not commands:
            return []

        results: list[CommandResult] = []
        for kind in EXECUTION_ORDER:
            command = commands.get(kind)
            if not command:
                continue
            results.append(
                await self._run_one(
                    workspace_dir=workspace_dir, kind=kind, command=command
                )
            )
        return results

    async def _run_one(
        self, workspace_dir: Path, kind: CommandKind, command: str
    ) -> CommandResult:
        self._observer.validation_command_started(
            workspace_dir=workspace_dir, kind=kind.value, command=command
        )
        started = time.monotonic()
        try:
            exit_code, stdout, stderr = await self._spawn(
                workspace_dir=workspace_dir, kind=kind, command=command
            )
        except ValidationExecError as exc:
            self._observer.validation_command_spawn_failed(
                workspace_dir=workspace_dir, kind=kind.value, reason=exc.reason
            )
            exit_code, stdout, stderr = -1, "", exc.reason

        duration_ms = int((time.monotonic() - started) * 1000)
        self._observer.validation_command_completed(
            workspace_dir=workspace_dir,
            kind=kind.value,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )
        return CommandResult(
            kind=kind,
            raw=command,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            duration_ms=duration_ms,
        )

    async def _spawn(
        self, workspace_dir: Path, kind: CommandKind, command: str
    ) -> tuple[int, str, str]:
        """Run one shell command to completion under the wall-clock timeout.

        Raises:
            ValidationExecError: if the shell process cannot be started.
        """
        try:
            proc = await spawn_shell(
                command=command, cwd=workspace_dir, env=os.environ.copy()
            )
        except OSError as exc:
            raise ValidationExecError(kind=kind.value, reason=str(exc)) from exc

        raw_out, raw_err, timed_out = await communicate_within(
            proc=proc, timeout_seconds=self._timeout_seconds
        )
        if timed_out:
            self._observer.validation_command_timed_out(
                workspace_dir=workspace_dir,
                kind=kind.value,
                timeout_seconds=self._timeout_seconds,
            )
            stderr = _decode(raw_err)
            note = f"Command timed out after {self._timeout_seconds:g}s"
            return -1, _decode(raw_out), f"{stderr}\n{note}" if stderr else note

        exit_code = proc.returncode if proc.returncode is not None else -1
        return exit_code, _decode(raw_out), _decode(raw_err)


def _decode(raw: bytes | None) -> str:
    return raw.decode("utf-8", errors="replace") if raw else ""
