"""WorkspaceTools — file and shell tools scoped to one run's workspace."""

from pathlib import Path
from typing import Any

from ze_bench.core.process import communicate_within, spawn_shell
from ze_bench.tools.domain.observer import ToolObserver
from ze_bench.tools.domain.tool import ToolDefinition, ToolHandler
from ze_bench.tools.infrastructure.errors import ToolInputError

RUN_COMMAND_TIMEOUT_SECONDS = 60
_BLOCKED_SEGMENT = "node_modules"

_PATH_PROPERTY = {
    "type": "string",
    "description": (
        'Path to the file relative to workspace root (e.g., "package.json",'
        ' "apps/app/package.json")'
    ),
}

READ_FILE = ToolDefinition(
    name="readFile",
    description=(
        "Read the contents of a file in the workspace. Use this to examine"
        " package.json files, configuration files, or any other files you need"
        " to understand before making changes."
    ),
    input_schema={
        "type": "object",
        "properties": {"path": _PATH_PROPERTY},
        "required": ["path"],
    },
)

WRITE_FILE = ToolDefinition(
    name="writeFile",
    description=(
        "Write content to a file in the workspace. Use this to update"
        " package.json files or any other configuration files. The entire file"
        " content must be provided."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "path": _PATH_PROPERTY,
            "content": {
                "type": "string",
                "description": "The complete content to write to the file",
            },
        },
        "required": ["path", "content"],
    },
)

RUN_COMMAND = ToolDefinition(
    name="runCommand",
    description=(
        "Execute a shell command in the workspace directory. Use this to run"
        ' package manager commands like "pnpm install", "pnpm outdated", or'
        " validation commands like tests. Commands run with a 60-second timeout."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "description": 'The shell command to execute (e.g., "pnpm install")',
            },
            "description": {
                "type": "string",
                "description": "Optional description of why you are running this command",
            },
        },
        "required": ["command"],
    },
)

LIST_FILES = ToolDefinition(
    name="listFiles",
    description=(
        "List files and directories in a given path within the workspace. Use"
        " this to explore the workspace structure."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": 'Path relative to workspace root (use "." for root directory)',
            }
        },
        "required": ["path"],
    },
)


class WorkspaceTools:
    """Handlers for readFile, writeFile, runCommand and listFiles.

    Handlers raise ToolInputError for refused or impossible requests; turning
    that into a model-facing string is the bridge's job.
    """

    def __init__(
        self,
        workspace_dir: Path,
        observer: ToolObserver,
        command_timeout_seconds: float = RUN_COMMAND_TIMEOUT_SECONDS,
    ) -> None:
        self._workspace_dir = workspace_dir.resolve()
        self._observer = observer
        self._command_timeout_seconds = command_timeout_seconds

    @staticmethod
    def definitions() -> list[ToolDefinition]:
        return [READ_FILE, WRITE_FILE, RUN_COMMAND, LIST_FILES]

    def handlers(self) -> dict[str, ToolHandler]:
        return {
            READ_FILE.name: self.read_file,
            WRITE_FILE.name: self.write_file,
            RUN_COMMAND.name: self.run_command,
            LIST_FILES.name: self.list_files,
        }

    async def read_file(self, tool_input: dict[str, Any]) -> str:
        path = self._resolve(tool_name=READ_FILE.name, raw=tool_input.get("path"))
        if not path.is_file():
            raise ToolInputError(
                tool_name=READ_FILE.name,
                reason=f"file '{tool_input['path']}' does not exist",
            )
        content = path.read_text(encoding="utf-8")
        self._observer.tool_invoked(
            workspace_dir=self._workspace_dir,
            tool_name=READ_FILE.name,
            detail=f"{tool_input['path']} ({len(content)} chars)",
        )
        return content

    async def write_file(self, tool_input: dict[str, Any]) -> str:
        path = self._resolve(tool_name=WRITE_FILE.name, raw=tool_input.get("path"))
        content = tool_input.get("content")
        if not isinstance(content, str):
            raise ToolInputError(
                tool_name=WRITE_FILE.name, reason="'content' must be a string"
            )
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self._observer.tool_invoked(
            workspace_dir=self._workspace_dir,
            tool_name=WRITE_FILE.name,
            detail=f"{tool_input['path']} ({len(content)} chars)",
        )
        return f"Successfully wrote to {tool_input['path']}"

    async def run_command(self, tool_input: dict[str, Any]) -> str:
        command = tool_input.get("command")
        if not isinstance(command, str) or not command.strip():
            raise ToolInputError(
                tool_name=RUN_COMMAND.name, reason="'command' must be a non-empty string"
            )
        self._observer.tool_invoked(
            workspace_dir=self._workspace_dir,
            tool_name=RUN_COMMAND.name,
            detail=str(tool_input.get("description") or command),
        )

        proc = await spawn_shell(command=command, cwd=self._workspace_dir)
        raw_out, raw_err, timed_out = await communicate_within(
            proc=proc, timeout_seconds=self._command_timeout_seconds
        )
        if timed_out:
            return (
                f"Command failed: timed out after {self._command_timeout_seconds:g}s"
            )

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            return f"Command failed: {stderr or stdout or f'exit code {proc.returncode}'}"
        return stdout or "Command completed successfully (no output)"

    async def list_files(self, tool_input: dict[str, Any]) -> str:
        path = self._resolve(
            tool_name=LIST_FILES.name, raw=tool_input.get("path", ".")
        )
        if not path.exists():
            raise ToolInputError(
                tool_name=LIST_FILES.name,
                reason=f"path '{tool_input.get('path', '.')}' does not exist",
            )
        if not path.is_dir():
            raise ToolInputError(
                tool_name=LIST_FILES.name,
                reason=f"'{tool_input.get('path', '.')}' is not a directory",
            )

        lines = [
            f"{'dir' if entry.is_dir() else 'file':<4} {entry.name}"
            for entry in sorted(path.iterdir())
            if entry.name != _BLOCKED_SEGMENT
        ]
        self._observer.tool_invoked(
            workspace_dir=self._workspace_dir,
            tool_name=LIST_FILES.name,
            detail=f"{tool_input.get('path', '.')} ({len(lines)} entries)",
        )
        return "\n".join(lines)

    def _resolve(self, tool_name: str, raw: object) -> Path:
        """Map a model-supplied relative path onto the workspace.

        Raises:
            ToolInputError: if the path is missing, touches node_modules, or
                resolves outside the workspace.
        """
        if not isinstance(raw, str) or not raw:
            raise ToolInputError(tool_name=tool_name, reason="'path' must be a string")
        if _BLOCKED_SEGMENT in raw:
            self._observer.tool_refused(
                workspace_dir=self._workspace_dir, tool_name=tool_name, reason=raw
            )
            raise ToolInputError(
                tool_name=tool_name,
                reason="access to node_modules is not allowed, focus on project files",
            )
        resolved = (self._workspace_dir / raw).resolve()
        if not resolved.is_relative_to(self._workspace_dir):
            self._observer.tool_refused(
                workspace_dir=self._workspace_dir, tool_name=tool_name, reason=raw
            )
            raise ToolInputError(
                tool_name=tool_name, reason=f"path '{raw}' is outside workspace"
            )
        return resolved
