"""Error types raised by run execution and the run recorder."""

from ze_bench.core.errors import ZeBenchError


class PromptMissingError(ZeBenchError):
    """A non-echo run has no prompt file for its tier. Fatal before provisioning."""

    def __init__(self, suite: str, scenario: str, tier: str) -> None:
        super().__init__(
            f"Failed to find prompt for tier '{tier}' of '{suite}/{scenario}'",
            stage="prompt",
        )


class RunFinalizedError(ZeBenchError):
    """Raised when a write targets a run that already reached a terminal state."""

    def __init__(self, run_id: str, status: str) -> None:
        super().__init__(f"Failed to update run '{run_id}': run is already {status}")


class UnknownRunError(ZeBenchError):
    def __init__(self, run_id: str) -> None:
        super().__init__(f"Failed to find run '{run_id}'")


class UnknownBatchError(ZeBenchError):
    def __init__(self, batch_id: str) -> None:
        super().__init__(f"Failed to find batch '{batch_id}'")
