"""RunRecord — the persisted state of one benchmark run."""

from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from ze_bench.diff.domain.diff import DiffArtifacts
from ze_bench.evaluation.domain.context import EvaluatorResult
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.scoring.domain.score import ScoreCard, WeightedTotal
from ze_bench.tools.domain.oracle import QuestionAnswer
from ze_bench.validation.domain.command import CommandResult

type RunId = str


class RunStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    INCOMPLETE = "incomplete"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.COMPLETED, RunStatus.FAILED, RunStatus.INCOMPLETE)


class RunTelemetry(BaseModel, frozen=True):
    tool_calls: int = 0
    tokens_in: int = 0
    tokens_out: int = 0
    cost_usd: float | None = None
    duration_ms: int = 0
    workspace_dir: Path | None = None
    prompt_sent: str | None = None


class StageFailure(BaseModel, frozen=True):
    """Why a run failed: the stage it stopped in and a human-readable reason."""

    stage: str
    reason: str


class DegradedStage(BaseModel, frozen=True):
    """A best-effort stage that failed without failing its run."""

    stage: Literal["diff", "evaluation"]
    reason: str


class RunMetadata(BaseModel, frozen=True):
    """Outputs gathered by the executor and stored when a run completes."""

    score_card: ScoreCard = Field(default_factory=dict)
    command_log: list[CommandResult] = Field(default_factory=list)
    degraded_stages: list[DegradedStage] = Field(default_factory=list)
    diff: DiffArtifacts | None = None


class RunRecord(BaseModel, frozen=True):
    """Snapshot of a run. The recorder replaces it on every write."""

    run_id: RunId
    combination: BenchmarkCombination
    batch_id: str | None = None
    status: RunStatus = RunStatus.PENDING
    started_at: datetime
    finished_at: datetime | None = None
    telemetry: RunTelemetry = Field(default_factory=RunTelemetry)
    score_card: ScoreCard = Field(default_factory=dict)
    total_score: float | None = None
    weighted_total: WeightedTotal | None = None
    question_log: list[QuestionAnswer] = Field(default_factory=list)
    command_log: list[CommandResult] = Field(default_factory=list)
    evaluations: list[EvaluatorResult] = Field(default_factory=list)
    degraded_stages: list[DegradedStage] = Field(default_factory=list)
    diff: DiffArtifacts | None = None
    failure: StageFailure | None = None
