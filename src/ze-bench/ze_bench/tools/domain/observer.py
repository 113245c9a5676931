"""ToolObserver port — domain events emitted while agents call workspace tools."""

from pathlib import Path
from typing import Protocol


class ToolObserver(Protocol):
    def tool_invoked(self, workspace_dir: Path, tool_name: str, detail: str) -> None: ...

    def tool_refused(self, workspace_dir: Path, tool_name: str, reason: str) -> None: ...

    def oracle_answered(self, question: str, matched: bool) -> None: ...
