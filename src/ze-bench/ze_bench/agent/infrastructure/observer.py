"""Structlog implementation of the AgentObserver port."""

import structlog


class StructlogAgentObserver:
    """Delegates agent domain events to structlog.

    Satisfies the AgentObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def agent_invocation_started(
        self, backend: str, model: str | None, tool_count: int
    ) -> None:
        self._log.info(
            "agent.invocation_started",
            backend=backend,
            model=model,
            tool_count=tool_count,
        )

    def agent_invocation_completed(
        self,
        backend: str,
        model: str | None,
        duration_ms: int,
        tool_calls: int,
        tokens_in: int,
        tokens_out: int,
        cost_usd: float | None,
    ) -> None:
        self._log.info(
            "agent.invocation_completed",
            backend=backend,
            model=model,
            duration_ms=duration_ms,
            tool_calls=tool_calls,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            cost_usd=cost_usd,
        )

    def agent_invocation_failed(
        self, backend: str, model: str | None, reason: str
    ) -> None:
        self._log.error(
            "agent.invocation_failed", backend=backend, model=model, reason=reason
        )
