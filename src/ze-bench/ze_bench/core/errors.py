"""Base exception class for all ze-bench-specific errors."""


class ZeBenchError(Exception):
    """Base class for all ze-bench errors.

    ``stage`` names the run stage an error belongs to (``prompt``, ``workspace``,
    ``agent``, ...) when it is recorded against a run; None otherwise.
    """

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage
