"""Structlog implementation of the ScenarioObserver port."""

from pathlib import Path

import structlog


class StructlogScenarioObserver:
    """Delegates scenario domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def scenario_loaded(self, suite: str, scenario: str, path: Path) -> None:
        self._log.debug(
            "scenario.loaded", suite=suite, scenario=scenario, path=str(path)
        )

    def prompt_missing(
        self, suite: str, scenario: str, tier: str, prompt_dir: Path
    ) -> None:
        self._log.warning(
            "scenario.prompt_missing",
            suite=suite,
            scenario=scenario,
            tier=tier,
            prompt_dir=str(prompt_dir),
        )

    def command_kind_ignored(self, suite: str, scenario: str, kind: str) -> None:
        self._log.warning(
            "scenario.command_kind_ignored", suite=suite, scenario=scenario, kind=kind
        )
