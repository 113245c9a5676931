"""Structlog implementation of the WorkspaceObserver port."""

from pathlib import Path

import structlog


class StructlogWorkspaceObserver:
    """Delegates workspace domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def workspace_prepared(
        self, suite: str, scenario: str, workspace_dir: Path
    ) -> None:
        self._log.info(
            "workspace.prepared",
            suite=suite,
            scenario=scenario,
            workspace_dir=str(workspace_dir),
        )

    def workspace_fixture_missing(
        self, suite: str, scenario: str, scenario_dir: Path
    ) -> None:
        self._log.warning(
            "workspace.fixture_missing",
            suite=suite,
            scenario=scenario,
            scenario_dir=str(scenario_dir),
        )

    def workspace_copy_failed(self, suite: str, scenario: str, reason: str) -> None:
        self._log.error(
            "workspace.copy_failed", suite=suite, scenario=scenario, reason=reason
        )
