"""Tests for ValidationRunner."""

import time
from pathlib import Path

from ze_bench.validation.application.runner import ValidationRunner
from ze_bench.validation.domain.command import CommandKind
from tests.validation.fake_observer import FakeValidationObserver


def _make_runner(
    timeout_seconds: float = 30,
) -> tuple[ValidationRunner, FakeValidationObserver]:
    observer = FakeValidationObserver()
    return ValidationRunner(observer=observer, timeout_seconds=timeout_seconds), observer


class TestRun:
    """Declared commands run sequentially in install, lint, typecheck order."""

    async def test_no_commands_returns_empty(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()
        assert await runner.run(workspace_dir=tmp_path, commands=None) == []
        assert await runner.run(workspace_dir=tmp_path, commands={}) == []

    async def test_failure_does_not_stop_later_commands(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()

        results = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.INSTALL: "exit 1", CommandKind.LINT: "exit 0"},
        )

        assert [r.exit_code for r in results] == [1, 0]
        assert [r.passed for r in results] == [False, True]

    async def test_fixed_order_regardless_of_declaration(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()

        results = await runner.run(
            workspace_dir=tmp_path,
            commands={
                CommandKind.TYPECHECK: "true",
                CommandKind.LINT: "true",
                CommandKind.INSTALL: "true",
            },
        )

        assert [r.kind for r in results] == [
            CommandKind.INSTALL,
            CommandKind.LINT,
            CommandKind.TYPECHECK,
        ]

    async def test_test_kind_is_never_run(self, tmp_path: Path) -> None:
        runner, observer = _make_runner()

        results = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.TEST: "touch ran", CommandKind.LINT: "true"},
        )

        assert [r.kind for r in results] == [CommandKind.LINT]
        assert not (tmp_path / "ran").exists()
        assert [e.kind for e in observer.started] == ["lint"]

    async def test_captures_output_and_raw_command(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()

        [result] = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.INSTALL: "echo out; echo err 1>&2"},
        )

        assert result.raw == "echo out; echo err 1>&2"
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"
        assert result.duration_ms >= 0

    async def test_runs_in_workspace_directory(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()

        await runner.run(
            workspace_dir=tmp_path, commands={CommandKind.INSTALL: "touch marker"}
        )

        assert (tmp_path / "marker").exists()

    async def test_empty_command_string_is_skipped(self, tmp_path: Path) -> None:
        runner, _ = _make_runner()

        results = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.INSTALL: "", CommandKind.LINT: "true"},
        )

        assert [r.kind for r in results] == [CommandKind.LINT]


class TestTimeout:
    """A command exceeding the timeout is killed and recorded, never raised."""

    async def test_timeout_yields_failed_result(self, tmp_path: Path) -> None:
        runner, observer = _make_runner(timeout_seconds=0.2)

        [result] = await runner.run(
            workspace_dir=tmp_path, commands={CommandKind.INSTALL: "sleep 5"}
        )

        assert result.exit_code == -1
        assert "timed out" in result.stderr
        assert observer.timed_out[0].kind == "install"

    async def test_timeout_does_not_stop_later_commands(self, tmp_path: Path) -> None:
        runner, _ = _make_runner(timeout_seconds=0.2)

        results = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.INSTALL: "sleep 5", CommandKind.LINT: "exit 0"},
        )

        assert [r.exit_code for r in results] == [-1, 0]

    async def test_timeout_kills_children_of_compound_command(
        self, tmp_path: Path
    ) -> None:
        runner, _ = _make_runner(timeout_seconds=0.2)
        started = time.monotonic()

        [result] = await runner.run(
            workspace_dir=tmp_path,
            commands={CommandKind.INSTALL: "sleep 5; echo done"},
        )

        assert time.monotonic() - started < 3
        assert result.exit_code == -1
        assert "done" not in result.stdout


class TestSpawnFailure:
    """A missing working directory is folded into the result."""

    async def test_missing_cwd_yields_failed_result(self, tmp_path: Path) -> None:
        runner, observer = _make_runner()

        [result] = await runner.run(
            workspace_dir=tmp_path / "missing", commands={CommandKind.INSTALL: "true"}
        )

        assert result.exit_code == -1
        assert result.stderr != ""
        assert observer.spawn_failures == ["install"]
