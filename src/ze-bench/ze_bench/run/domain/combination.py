"""BenchmarkCombination — one (suite, scenario, tier, backend, model) cell."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from ze_bench.agent.domain.backend import AgentBackend


class BenchmarkCombination(BaseModel, frozen=True):
    """A single point of the benchmark matrix.

    Backends that ignore models always carry ``model=None``.
    """

    suite: str = Field(min_length=1)
    scenario: str = Field(min_length=1)
    tier: str = Field(min_length=1)
    agent: AgentBackend
    model: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_ignored_model(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("agent") is not None:
            if AgentBackend(data["agent"]).ignores_model:
                return {**data, "model": None}
        return data

    @property
    def label(self) -> str:
        base = f"{self.suite}/{self.scenario}/{self.tier}/{self.agent.value}"
        return f"{base}:{self.model}" if self.model else base
