"""Structlog implementation of the ToolObserver port."""

from pathlib import Path

import structlog


class StructlogToolObserver:
    """Delegates tool domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def tool_invoked(self, workspace_dir: Path, tool_name: str, detail: str) -> None:
        self._log.debug(
            "tool.invoked",
            workspace_dir=str(workspace_dir),
            tool_name=tool_name,
            detail=detail,
        )

    def tool_refused(self, workspace_dir: Path, tool_name: str, reason: str) -> None:
        self._log.warning(
            "tool.refused",
            workspace_dir=str(workspace_dir),
            tool_name=tool_name,
            reason=reason,
        )

    def oracle_answered(self, question: str, matched: bool) -> None:
        self._log.info("tool.oracle_answered", question=question, matched=matched)
