"""Error types raised while executing validation commands."""

from ze_bench.core.errors import ZeBenchError


class ValidationExecError(ZeBenchError):
    """Raised when a validation command cannot be spawned at all.

    Never escapes ValidationRunner: it is converted into a CommandResult.
    """

    def __init__(self, kind: str, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Failed to execute validation command '{kind}': {reason}",
            stage="validation",
        )
