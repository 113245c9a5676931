"""Scenario — the immutable description of one benchmark task."""

from pydantic import BaseModel, ConfigDict, Field

from ze_bench.validation.domain.command import CommandKind


class ValidationSpec(BaseModel, frozen=True):
    commands: dict[CommandKind, str] = Field(default_factory=dict)


class RubricOverrides(BaseModel, frozen=True):
    weights: dict[str, float] = Field(default_factory=dict)


class OracleSpec(BaseModel, frozen=True):
    # Relative to the scenario directory.
    answers_file: str | None = None


class Scenario(BaseModel):
    """Parsed ``scenario.yaml``.

    Unknown keys are kept (``extra="allow"``) because evaluators read
    scenario-specific sections the harness itself never interprets.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    suite: str = Field(min_length=1)
    name: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    timeout_minutes: float = Field(default=60, gt=0)
    validation: ValidationSpec = Field(default_factory=ValidationSpec)
    rubric_overrides: RubricOverrides = Field(default_factory=RubricOverrides)
    oracle: OracleSpec | None = None
