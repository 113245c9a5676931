"""Evaluation value objects — what evaluators see and what they return."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ze_bench.diff.domain.diff import DepChange, FileDiff
from ze_bench.scenario.domain.scenario import Scenario
from ze_bench.scoring.domain.score import ScoreCard
from ze_bench.validation.domain.command import CommandResult


class EvaluationContext(BaseModel, frozen=True):
    """Everything a run produced, handed to each evaluator."""

    scenario: Scenario
    workspace_dir: Path
    agent_response: str | None = None
    command_log: list[CommandResult] = Field(default_factory=list)
    diff_summary: list[FileDiff] = Field(default_factory=list)
    deps_delta: list[DepChange] = Field(default_factory=list)


class EvaluatorResult(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    score_card: ScoreCard = Field(default_factory=dict)
    summary: str = ""
    details: dict[str, Any] = Field(default_factory=dict)


class EvaluationOutcome(BaseModel, frozen=True):
    """Merged scorecard (later evaluators win on clashes) plus every individual result."""

    score_card: ScoreCard = Field(default_factory=dict)
    results: list[EvaluatorResult] = Field(default_factory=list)
