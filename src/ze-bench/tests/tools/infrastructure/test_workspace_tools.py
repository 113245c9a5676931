"""Tests for WorkspaceTools handlers."""

import time
from pathlib import Path

import pytest

from ze_bench.tools.infrastructure.errors import ToolInputError
from ze_bench.tools.infrastructure.workspace_tools import WorkspaceTools
from tests.tools.fake_observer import FakeToolObserver


def _make_tools(
    workspace: Path, command_timeout_seconds: float = 60
) -> tuple[WorkspaceTools, FakeToolObserver]:
    observer = FakeToolObserver()
    tools = WorkspaceTools(
        workspace_dir=workspace,
        observer=observer,
        command_timeout_seconds=command_timeout_seconds,
    )
    return tools, observer


class TestDefinitions:
    def test_four_tools_with_matching_handlers(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        names = [d.name for d in tools.definitions()]

        assert names == ["readFile", "writeFile", "runCommand", "listFiles"]
        assert sorted(tools.handlers()) == sorted(names)


class TestReadWrite:
    """readFile and writeFile operate on paths relative to the workspace."""

    async def test_read_file(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"name": "app"}')
        tools, observer = _make_tools(tmp_path)

        content = await tools.read_file({"path": "package.json"})

        assert content == '{"name": "app"}'
        assert observer.invoked[0].tool_name == "readFile"

    async def test_read_missing_file_raises(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        with pytest.raises(ToolInputError, match="does not exist"):
            await tools.read_file({"path": "nope.json"})

    async def test_write_file_creates_parents(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)

        message = await tools.write_file(
            {"path": "apps/web/package.json", "content": "{}"}
        )

        assert message == "Successfully wrote to apps/web/package.json"
        assert (tmp_path / "apps/web/package.json").read_text() == "{}"

    async def test_write_requires_string_content(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        with pytest.raises(ToolInputError, match="content"):
            await tools.write_file({"path": "a.txt", "content": 3})


class TestSandbox:
    """Paths escaping the workspace or touching node_modules are refused."""

    async def test_parent_escape_refused(self, tmp_path: Path) -> None:
        workspace = tmp_path / "ws"
        workspace.mkdir()
        (tmp_path / "secret.txt").write_text("secret")
        tools, observer = _make_tools(workspace)

        with pytest.raises(ToolInputError, match="outside workspace"):
            await tools.read_file({"path": "../secret.txt"})
        assert observer.refused[0].tool_name == "readFile"

    async def test_absolute_path_outside_refused(self, tmp_path: Path) -> None:
        workspace = tmp_path / "ws"
        workspace.mkdir()
        tools, _ = _make_tools(workspace)

        with pytest.raises(ToolInputError, match="outside workspace"):
            await tools.write_file({"path": str(tmp_path / "x.txt"), "content": ""})
        assert not (tmp_path / "x.txt").exists()

    async def test_node_modules_refused(self, tmp_path: Path) -> None:
        (tmp_path / "node_modules" / "react").mkdir(parents=True)
        tools, _ = _make_tools(tmp_path)

        with pytest.raises(ToolInputError, match="node_modules"):
            await tools.list_files({"path": "node_modules/react"})

    async def test_missing_path_refused(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        with pytest.raises(ToolInputError, match="'path' must be a string"):
            await tools.read_file({})


class TestListFiles:
    async def test_lists_sorted_and_hides_node_modules(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "package.json").write_text("{}")
        tools, _ = _make_tools(tmp_path)

        listing = await tools.list_files({"path": "."})

        assert listing.splitlines() == ["file package.json", "dir  src"]

    async def test_file_path_is_not_a_directory(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("")
        tools, _ = _make_tools(tmp_path)

        with pytest.raises(ToolInputError, match="not a directory"):
            await tools.list_files({"path": "a.txt"})


class TestRunCommand:
    """runCommand returns text for every outcome instead of raising."""

    async def test_returns_stdout(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        assert await tools.run_command({"command": "echo hello"}) == "hello\n"

    async def test_runs_in_workspace(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        await tools.run_command({"command": "touch created"})
        assert (tmp_path / "created").exists()

    async def test_no_output(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        assert await tools.run_command({"command": "true"}) == (
            "Command completed successfully (no output)"
        )

    async def test_nonzero_exit_reports_stderr(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        result = await tools.run_command({"command": "echo broken 1>&2; exit 3"})
        assert result == "Command failed: broken\n"

    async def test_nonzero_exit_without_output(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        result = await tools.run_command({"command": "exit 4"})
        assert result == "Command failed: exit code 4"

    async def test_timeout(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path, command_timeout_seconds=0.2)
        result = await tools.run_command({"command": "sleep 5"})
        assert result == "Command failed: timed out after 0.2s"

    async def test_timeout_covers_compound_command(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path, command_timeout_seconds=0.2)
        started = time.monotonic()

        result = await tools.run_command({"command": "sleep 5 && touch late"})

        assert time.monotonic() - started < 3
        assert result == "Command failed: timed out after 0.2s"
        assert not (tmp_path / "late").exists()

    async def test_empty_command_rejected(self, tmp_path: Path) -> None:
        tools, _ = _make_tools(tmp_path)
        with pytest.raises(ToolInputError):
            await tools.run_command({"command": "  "})
