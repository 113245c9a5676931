"""ScenarioObserver port — domain events emitted while reading suites."""

from pathlib import Path
from typing import Protocol


class ScenarioObserver(Protocol):
    def scenario_loaded(self, suite: str, scenario: str, path: Path) -> None: ...

    def prompt_missing(
        self, suite: str, scenario: str, tier: str, prompt_dir: Path
    ) -> None: ...

    def command_kind_ignored(self, suite: str, scenario: str, kind: str) -> None: ...
