"""AgentSession — drives one agent invocation for a run and captures telemetry."""

import json
import time
from dataclasses import dataclass
from pathlib import Path

from ze_bench.agent.domain.adapter import AgentAdapterFactory
from ze_bench.agent.domain.observer import AgentObserver
from ze_bench.agent.domain.request import AgentMessage, AgentRequest, AgentResponse
from ze_bench.agent.infrastructure.errors import AgentInvocationError
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.tools.application.bridge import Toolkit
from ze_bench.tools.domain.tool import render_tools


@dataclass(frozen=True)
class SessionResult:
    """Exactly one of ``response`` and ``error`` is set."""

    response: AgentResponse | None
    error: AgentInvocationError | None
    prompt_sent: str
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class AgentSession:
    """Builds the request, resolves the adapter, and contains every adapter failure.

    run() never raises: anything the adapter throws comes back as
    ``SessionResult.error``.
    """

    def __init__(
        self,
        adapter_factory: AgentAdapterFactory,
        observer: AgentObserver,
        max_turns: int = 25,
        max_tokens: int = 4096,
    ) -> None:
        self._adapter_factory = adapter_factory
        self._observer = observer
        self._max_turns = max_turns
        self._max_tokens = max_tokens

    async def run(
        self,
        combination: BenchmarkCombination,
        workspace_dir: Path,
        prompt_text: str,
        toolkit: Toolkit | None = None,
    ) -> SessionResult:
        backend = combination.agent
        active_toolkit = toolkit if backend.supports_tools else None
        messages = build_messages(
            workspace_dir=workspace_dir,
            prompt_text=prompt_text,
            tool_names=active_toolkit.tool_names if active_toolkit is not None else [],
        )
        prompt_sent = json.dumps([m.model_dump() for m in messages])
        request = AgentRequest(
            messages=messages,
            workspace_dir=workspace_dir,
            model=combination.model,
            tools=(
                render_tools(tools=active_toolkit.tools, tool_format=backend.tool_format)
                if active_toolkit is not None
                else []
            ),
            tool_executor=active_toolkit,
            max_turns=self._max_turns,
            max_tokens=self._max_tokens,
        )

        self._observer.agent_invocation_started(
            backend=backend.value,
            model=combination.model,
            tool_count=len(request.tools),
        )
        started = time.monotonic()
        try:
            adapter = self._adapter_factory.create(
                backend=backend, model=combination.model
            )
            response = await adapter.send(request)
        except AgentInvocationError as exc:
            return self._failed(
                combination=combination, error=exc, prompt_sent=prompt_sent
            )
        except Exception as exc:
            # Adapter failures of any type are confined to this run.
            return self._failed(
                combination=combination,
                error=AgentInvocationError(reason=f"{type(exc).__name__}: {exc}"),
                prompt_sent=prompt_sent,
            )

        duration_ms = int((time.monotonic() - started) * 1000)
        self._observer.agent_invocation_completed(
            backend=backend.value,
            model=combination.model,
            duration_ms=duration_ms,
            tool_calls=response.tool_calls,
            tokens_in=response.tokens_in,
            tokens_out=response.tokens_out,
            cost_usd=response.cost_usd,
        )
        return SessionResult(
            response=response,
            error=None,
            prompt_sent=prompt_sent,
            duration_ms=duration_ms,
        )

    def _failed(
        self,
        combination: BenchmarkCombination,
        error: AgentInvocationError,
        prompt_sent: str,
    ) -> SessionResult:
        self._observer.agent_invocation_failed(
            backend=combination.agent.value,
            model=combination.model,
            reason=error.reason,
        )
        return SessionResult(response=None, error=error, prompt_sent=prompt_sent)


def build_messages(
    workspace_dir: Path, prompt_text: str, tool_names: list[str]
) -> list[AgentMessage]:
    """System message describing the task setting, then the tier prompt as the user turn."""
    system = (
        "You are working on a software project checked out at"
        f" {workspace_dir}. Complete the task described by the user by changing"
        " files in that workspace."
    )
    if tool_names:
        system += f" Available tools: {', '.join(tool_names)}."
    return [
        AgentMessage(role="system", content=system),
        AgentMessage(role="user", content=prompt_text),
    ]
