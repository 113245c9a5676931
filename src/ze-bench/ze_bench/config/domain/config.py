"""Top-level BenchConfig aggregate — the root configuration object."""

from pathlib import Path

from pydantic import BaseModel, Field

from ze_bench.config.domain.agent import AgentsConfig
from ze_bench.config.domain.execution import ExecutionConfig


class BenchConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a ze-bench process.

    Every field has a default so that running without a config file is valid.
    """

    suites_dir: Path = Path("./suites")
    results_dir: Path = Path("./results")
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    agents: AgentsConfig = Field(default_factory=AgentsConfig)

    @property
    def workspaces_dir(self) -> Path:
        """Shared root under which every run gets its own workspace directory."""
        return self.results_dir / "workspaces"
