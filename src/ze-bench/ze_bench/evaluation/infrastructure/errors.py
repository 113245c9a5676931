"""Error types raised by evaluation and diff stages."""

from typing import Literal

from ze_bench.core.errors import ZeBenchError


class DiffOrEvaluationError(ZeBenchError):
    """A best-effort stage failed; the run is degraded, not failed."""

    def __init__(self, stage: Literal["diff", "evaluation"], reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to complete {stage} stage: {reason}", stage=stage)


class EvaluatorLoadError(ZeBenchError):
    """Raised when a registered evaluator entry point cannot be loaded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Failed to load evaluator '{name}': {reason}")
