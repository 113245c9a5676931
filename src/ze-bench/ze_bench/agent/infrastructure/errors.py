"""Error types raised by agent infrastructure."""

from ze_bench.core.errors import ZeBenchError


class AgentInvocationError(ZeBenchError):
    """Raised when the agent cannot be invoked or returns an error response."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to invoke agent: {reason}", stage="agent")


class AgentBackendNotSupportedError(ZeBenchError):
    """Raised when a backend name does not map to a known AgentBackend."""

    def __init__(self, backend: str) -> None:
        super().__init__(
            f"Failed to create agent adapter: unsupported backend '{backend}'"
        )
