"""BatchSelection — the user's combination selector for one batch."""

from pydantic import BaseModel, Field

from ze_bench.agent.domain.backend import AgentBackend


class BatchSelection(BaseModel, frozen=True):
    """Axes of the combination matrix.

    An empty ``scenarios`` list means every scenario of each suite; an empty
    ``tiers`` list means every tier available for each scenario.
    """

    suites: list[str] = Field(min_length=1)
    scenarios: list[str] = Field(default_factory=list)
    tiers: list[str] = Field(default_factory=list)
    agents: list[AgentBackend] = Field(min_length=1)
    models: list[str] = Field(default_factory=list)
    max_concurrency: int | None = Field(default=None, ge=1)
