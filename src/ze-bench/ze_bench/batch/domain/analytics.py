"""Post-batch breakdowns: failure stages, per-scenario and per-agent results."""

from pydantic import BaseModel, Field

from ze_bench.agent.domain.backend import AgentBackend


class FailureCount(BaseModel, frozen=True):
    """How many runs stopped in one stage (``interrupted`` for incomplete runs)."""

    stage: str
    count: int


class GroupStats(BaseModel, frozen=True):
    runs: int
    successful_runs: int
    avg_weighted_score: float | None = None

    @property
    def success_rate(self) -> float:
        return self.successful_runs / self.runs if self.runs else 0.0


class ScenarioBreakdown(GroupStats, frozen=True):
    suite: str
    scenario: str


class AgentPerformance(GroupStats, frozen=True):
    agent: AgentBackend
    model: str | None = None

    @property
    def label(self) -> str:
        return f"{self.agent.value} [{self.model}]" if self.model else self.agent.value


class BatchAnalytics(BaseModel, frozen=True):
    """Groupings over every run of a batch.

    Success counts include completed runs only; averages use completed runs
    that carry a weighted total. ``agent_performance`` is ranked best first.
    """

    failure_breakdown: list[FailureCount] = Field(default_factory=list)
    scenario_breakdown: list[ScenarioBreakdown] = Field(default_factory=list)
    agent_performance: list[AgentPerformance] = Field(default_factory=list)
