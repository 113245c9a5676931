"""YamlScenarioLoader — reads scenarios and tier prompts from a suites tree.

Expected layout::

    <suites_dir>/<suite>/scenarios/<scenario>/scenario.yaml
    <suites_dir>/<suite>/prompts/<scenario>/<tier>.md | <tier>-<label>.md
"""

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ze_bench.scenario.domain.observer import ScenarioObserver
from ze_bench.scenario.domain.scenario import Scenario
from ze_bench.scenario.infrastructure.errors import ScenarioLoadError
from ze_bench.validation.domain.command import CommandKind

_TIER_PATTERN = re.compile(r"^(L\d+|Lx)(-.*)?\.md$")


class YamlScenarioLoader:
    """Satisfies the ScenarioLoader protocol for an on-disk suites directory."""

    def __init__(self, suites_dir: Path, observer: ScenarioObserver) -> None:
        self._suites_dir = suites_dir
        self._observer = observer

    def scenario_dir(self, suite: str, scenario: str) -> Path:
        return self._suites_dir / suite / "scenarios" / scenario

    def load(self, suite: str, scenario: str) -> Scenario:
        """Parse and validate ``scenario.yaml``.

        Raises:
            ScenarioLoadError: if the file is missing, is not valid YAML, or
                violates the Scenario schema.
        """
        path = self.scenario_dir(suite=suite, scenario=scenario) / "scenario.yaml"
        raw = self._drop_unknown_commands(
            suite=suite, scenario=scenario, raw=_read_yaml(path=path)
        )
        try:
            parsed = Scenario.model_validate({**raw, "suite": suite, "name": scenario})
        except ValidationError as exc:
            raise ScenarioLoadError(path=path, reason=str(exc)) from exc
        self._observer.scenario_loaded(suite=suite, scenario=scenario, path=path)
        return parsed

    def load_prompt(self, suite: str, scenario: str, tier: str) -> str | None:
        """Return the prompt text for a tier, or None if no prompt file exists.

        ``L1.md`` and ``L1-<anything>.md`` both match tier ``L1``; the
        lexicographically first match wins.
        """
        prompt_dir = self._prompt_dir(suite=suite, scenario=scenario)
        candidates = sorted(
            entry for entry in _list_files(prompt_dir) if _tier_of(entry.name) == tier
        )
        if not candidates:
            self._observer.prompt_missing(
                suite=suite, scenario=scenario, tier=tier, prompt_dir=prompt_dir
            )
            return None
        return candidates[0].read_text(encoding="utf-8")

    def available_tiers(self, suite: str, scenario: str) -> list[str]:
        """Return the sorted tier names that have at least one prompt file."""
        prompt_dir = self._prompt_dir(suite=suite, scenario=scenario)
        tiers: set[str] = set()
        for entry in _list_files(prompt_dir):
            tier = _tier_of(entry.name)
            if tier is not None:
                tiers.add(tier)
        return sorted(tiers)

    def list_scenarios(self, suite: str) -> list[str]:
        """Return the scenario directory names of a suite, sorted."""
        root = self._suites_dir / suite / "scenarios"
        if not root.is_dir():
            return []
        return sorted(entry.name for entry in root.iterdir() if entry.is_dir())

    def _prompt_dir(self, suite: str, scenario: str) -> Path:
        return self._suites_dir / suite / "prompts" / scenario

    def _drop_unknown_commands(
        self, suite: str, scenario: str, raw: dict[str, Any]
    ) -> dict[str, Any]:
        """Remove validation command kinds the runner does not know.

        Each dropped kind is reported through the observer.
        """
        validation = raw.get("validation")
        if not isinstance(validation, dict):
            return raw
        commands = validation.get("commands")
        if not isinstance(commands, dict):
            return raw

        known = {kind.value for kind in CommandKind}
        kept = {kind: command for kind, command in commands.items() if kind in known}
        for kind in sorted(str(kind) for kind in commands if kind not in known):
            self._observer.command_kind_ignored(
                suite=suite, scenario=scenario, kind=kind
            )
        return {**raw, "validation": {**validation, "commands": kept}}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ScenarioLoadError(path=path, reason="file not found")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScenarioLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ScenarioLoadError(path=path, reason="top level must be a mapping")
    return raw


def _tier_of(filename: str) -> str | None:
    match = _TIER_PATTERN.match(filename)
    return match.group(1) if match else None


def _list_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return [entry for entry in directory.iterdir() if entry.is_file()]
