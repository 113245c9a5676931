"""Error types raised by tool infrastructure."""

from pathlib import Path

from ze_bench.core.errors import ZeBenchError


class OracleAnswersError(ZeBenchError):
    """Raised when an oracle answers file cannot be read or is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load oracle answers: {reason}: {path}")


class ToolInputError(ZeBenchError):
    """Raised inside a tool handler when the model's input cannot be honoured.

    The bridge converts it into an ``Error: ...`` string for the model.
    """

    def __init__(self, tool_name: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to run tool '{tool_name}': {reason}")
