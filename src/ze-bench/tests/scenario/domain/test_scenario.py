"""Tests for the Scenario model."""

import pytest
from pydantic import ValidationError

from ze_bench.scenario.domain.scenario import Scenario
from ze_bench.validation.domain.command import CommandKind


class TestScenario:
    def test_minimal(self) -> None:
        scenario = Scenario(suite="pnpm", name="upgrade")

        assert scenario.timeout_minutes == 60
        assert scenario.validation.commands == {}
        assert scenario.oracle is None

    def test_commands_keyed_by_kind(self) -> None:
        scenario = Scenario.model_validate(
            {
                "suite": "pnpm",
                "name": "upgrade",
                "validation": {"commands": {"install": "pnpm install", "lint": "x"}},
            }
        )

        assert scenario.validation.commands[CommandKind.INSTALL] == "pnpm install"

    def test_unknown_command_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Scenario.model_validate(
                {
                    "suite": "pnpm",
                    "name": "upgrade",
                    "validation": {"commands": {"deploy": "x"}},
                }
            )

    def test_extra_sections_are_kept(self) -> None:
        scenario = Scenario.model_validate(
            {"suite": "pnpm", "name": "upgrade", "targets": {"react": "^19"}}
        )

        assert scenario.model_extra == {"targets": {"react": "^19"}}

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Scenario(suite="pnpm", name="upgrade", timeout_minutes=0)
