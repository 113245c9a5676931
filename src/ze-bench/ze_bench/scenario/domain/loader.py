"""ScenarioLoader Protocol — structural interface for reading suites on disk."""

from pathlib import Path
from typing import Protocol

from ze_bench.scenario.domain.scenario import Scenario


class ScenarioLoader(Protocol):
    """Resolves scenarios, their directories, and their tier prompts."""

    def scenario_dir(self, suite: str, scenario: str) -> Path: ...

    def load(self, suite: str, scenario: str) -> Scenario: ...

    def load_prompt(self, suite: str, scenario: str, tier: str) -> str | None: ...

    def available_tiers(self, suite: str, scenario: str) -> list[str]: ...

    def list_scenarios(self, suite: str) -> list[str]: ...
