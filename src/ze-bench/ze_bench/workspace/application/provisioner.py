"""WorkspaceProvisioner — materializes an isolated copy of a scenario fixture."""

import asyncio
import shutil
import tempfile
from pathlib import Path

from ze_bench.scenario.domain.loader import ScenarioLoader
from ze_bench.workspace.domain.observer import WorkspaceObserver
from ze_bench.workspace.domain.workspace import PreparedWorkspace

FIXTURE_CANDIDATES: tuple[str, ...] = ("repo", "repo-fixture")
_EXCLUDED_FROM_COPY: tuple[str, ...] = ("README.md",)


class WorkspaceProvisioner:
    """Copies a scenario's fixture tree into a fresh, uniquely named directory.

    Fail-soft: a missing fixture or a failed copy is reported to the observer
    and returned as None; prepare() never raises.
    """

    def __init__(
        self,
        workspaces_root: Path,
        scenario_loader: ScenarioLoader,
        observer: WorkspaceObserver,
    ) -> None:
        self._workspaces_root = workspaces_root
        self._scenario_loader = scenario_loader
        self._observer = observer

    async def prepare(self, suite: str, scenario: str) -> PreparedWorkspace | None:
        scenario_dir = self._scenario_loader.scenario_dir(
            suite=suite, scenario=scenario
        )
        fixture_dir = _find_fixture(scenario_dir=scenario_dir)
        if fixture_dir is None:
            self._observer.workspace_fixture_missing(
                suite=suite, scenario=scenario, scenario_dir=scenario_dir
            )
            return None

        try:
            workspace_dir = await asyncio.to_thread(
                self._copy_fixture,
                fixture_dir=fixture_dir,
                prefix=f"{suite}-{scenario}-",
            )
        except OSError as exc:
            self._observer.workspace_copy_failed(
                suite=suite, scenario=scenario, reason=str(exc)
            )
            return None

        self._observer.workspace_prepared(
            suite=suite, scenario=scenario, workspace_dir=workspace_dir
        )
        return PreparedWorkspace(workspace_dir=workspace_dir, fixture_dir=fixture_dir)

    def _copy_fixture(self, fixture_dir: Path, prefix: str) -> Path:
        self._workspaces_root.mkdir(parents=True, exist_ok=True)
        # mkdtemp creates the directory atomically, so names never collide.
        workspace_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=self._workspaces_root))
        try:
            shutil.copytree(
                fixture_dir,
                workspace_dir,
                dirs_exist_ok=True,
                ignore=shutil.ignore_patterns(*_EXCLUDED_FROM_COPY),
            )
        except OSError:
            shutil.rmtree(workspace_dir, ignore_errors=True)
            raise
        return workspace_dir


def _find_fixture(scenario_dir: Path) -> Path | None:
    for candidate in FIXTURE_CANDIDATES:
        path = scenario_dir / candidate
        if path.is_dir():
            return path
    return None
