"""AgentObserver port — domain events emitted around agent invocations."""

from typing import Protocol


class AgentObserver(Protocol):
    def agent_invocation_started(
        self, backend: str, model: str | None, tool_count: int
    ) -> None: ...

    def agent_invocation_completed(
        self,
        backend: str,
        model: str | None,
        duration_ms: int,
        tool_calls: int,
        tokens_in: int,
        tokens_out: int,
        cost_usd: float | None,
    ) -> None: ...

    def agent_invocation_failed(
        self, backend: str, model: str | None, reason: str
    ) -> None: ...
