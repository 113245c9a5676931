"""WorkspaceObserver port — domain events emitted while provisioning workspaces."""

from pathlib import Path
from typing import Protocol


class WorkspaceObserver(Protocol):
    def workspace_prepared(
        self, suite: str, scenario: str, workspace_dir: Path
    ) -> None: ...

    def workspace_fixture_missing(
        self, suite: str, scenario: str, scenario_dir: Path
    ) -> None: ...

    def workspace_copy_failed(self, suite: str, scenario: str, reason: str) -> None: ...
