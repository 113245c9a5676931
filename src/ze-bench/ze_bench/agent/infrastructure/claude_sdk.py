"""ClaudeCodeAdapter — runs Claude Code in the workspace via the Claude Agent SDK."""

from typing import Any

from claude_agent_sdk import query
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    ToolUseBlock,
)

from ze_bench.agent.domain.request import AgentRequest, AgentResponse
from ze_bench.agent.infrastructure.errors import AgentInvocationError


class ClaudeCodeAdapter:
    """Delegates the whole task to a Claude Code session rooted at the workspace.

    Claude Code uses its own built-in file and shell tools, so request.tools
    is ignored; every ToolUseBlock in the stream counts as one tool call.
    """

    def __init__(self, model: str | None) -> None:
        self._model = model

    @property
    def name(self) -> str:
        return "claude-code"

    async def send(self, request: AgentRequest) -> AgentResponse:
        """Run one SDK session and return the final result text with telemetry.

        Raises:
            AgentInvocationError: if the SDK raises, the agent returns an error,
                or no ResultMessage is present in the response stream.
        """
        options = ClaudeAgentOptions(
            model=self._model,
            system_prompt=request.system_prompt or None,
            cwd=str(request.workspace_dir),
            max_turns=request.max_turns,
            permission_mode="bypassPermissions",
            setting_sources=[],
        )
        result_message, tool_calls = await self._collect_result(
            prompt=request.user_prompt, options=options
        )
        usage = self._map_usage(raw=result_message.usage)
        assert result_message.result is not None  # guaranteed by _collect_result
        return AgentResponse(
            content=result_message.result,
            tokens_in=usage[0],
            tokens_out=usage[1],
            cost_usd=result_message.total_cost_usd,
            tool_calls=tool_calls,
        )

    async def _collect_result(
        self, prompt: str, options: ClaudeAgentOptions
    ) -> tuple[ResultMessage, int]:
        """Drain the SDK message stream, keeping the ResultMessage and a tool-use count.

        Raises:
            AgentInvocationError: on SDK errors or missing/error ResultMessage.
        """
        result_message: ResultMessage | None = None
        tool_calls = 0

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, ResultMessage):
                    result_message = message
                elif isinstance(message, AssistantMessage):
                    tool_calls += sum(
                        1 for block in message.content if isinstance(block, ToolUseBlock)
                    )
        except ClaudeSDKError as exc:
            raise AgentInvocationError(reason=str(exc)) from exc
        except Exception as exc:
            # The SDK raises a bare Exception when its message reader hits a
            # fatal error (e.g. subprocess exit).
            raise AgentInvocationError(reason=str(exc)) from exc

        if result_message is None:
            raise AgentInvocationError(reason="no ResultMessage in response stream")

        if result_message.is_error:
            raise AgentInvocationError(
                reason=f"agent returned error response: {result_message.result}"
            )

        if result_message.result is None:
            raise AgentInvocationError(reason="ResultMessage has no result text")

        return result_message, tool_calls

    def _map_usage(self, raw: dict[str, Any] | None) -> tuple[int, int]:
        """Return (input, output) token counts, cache reads included in input."""
        if raw is None:
            return 0, 0
        tokens_in = (
            (raw.get("input_tokens") or 0)
            + (raw.get("cache_read_input_tokens") or 0)
            + (raw.get("cache_creation_input_tokens") or 0)
        )
        return tokens_in, raw.get("output_tokens") or 0
