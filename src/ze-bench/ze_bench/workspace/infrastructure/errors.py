"""Error types raised while provisioning workspaces."""

from ze_bench.core.errors import ZeBenchError


class WorkspaceProvisionError(ZeBenchError):
    """Recorded against a run whose workspace could not be prepared."""

    def __init__(self, suite: str, scenario: str, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Failed to prepare workspace for '{suite}/{scenario}': {reason}",
            stage="workspace",
        )
