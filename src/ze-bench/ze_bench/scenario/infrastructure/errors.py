"""Error types raised by scenario infrastructure."""

from pathlib import Path

from ze_bench.core.errors import ZeBenchError


class ScenarioLoadError(ZeBenchError):
    """Raised when a scenario.yaml cannot be read, parsed, or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Failed to load scenario: {reason}: {path}", stage="scenario"
        )
