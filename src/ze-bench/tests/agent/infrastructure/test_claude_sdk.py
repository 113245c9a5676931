"""Tests for ClaudeCodeAdapter infrastructure implementation."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import (
    AssistantMessage,
    ResultMessage,
    TextBlock,
    ToolUseBlock,
)

from ze_bench.agent.domain.request import AgentMessage, AgentRequest
from ze_bench.agent.infrastructure.claude_sdk import ClaudeCodeAdapter
from ze_bench.agent.infrastructure.errors import AgentInvocationError

_QUERY = "ze_bench.agent.infrastructure.claude_sdk.query"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_result_message(
    result: str | None = "Upgraded react to 19.",
    is_error: bool = False,
    total_cost_usd: float | None = 0.005,
    usage: dict[str, Any] | None = None,
) -> ResultMessage:
    return ResultMessage(
        subtype="success",
        duration_ms=1500,
        duration_api_ms=1200,
        is_error=is_error,
        num_turns=2,
        session_id="test-session-id",
        total_cost_usd=total_cost_usd,
        usage=usage,
        result=result,
    )


def _assistant_with_tool_uses(count: int) -> AssistantMessage:
    blocks: list[Any] = [TextBlock(text="Working on it.")]
    blocks.extend(
        ToolUseBlock(id=f"tu_{i}", name="Bash", input={"command": "ls"})
        for i in range(count)
    )
    return AssistantMessage(content=blocks, model="claude-sonnet-4-5")


async def _async_gen(*items: Any) -> AsyncIterator[Any]:
    """Async generator yielding a fixed set of items."""
    for item in items:
        yield item


def _mock_query(*items: Any) -> MagicMock:
    """Return a MagicMock for `query` whose return value is an async iterable."""
    mock = MagicMock()
    mock.return_value = _async_gen(*items)
    return mock


def _request(workspace_dir: Path = Path("/tmp/ws")) -> AgentRequest:
    return AgentRequest(
        messages=[
            AgentMessage(role="system", content="You are a coder."),
            AgentMessage(role="user", content="Upgrade react."),
        ],
        workspace_dir=workspace_dir,
        max_turns=12,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestSend:
    """send() maps the SDK's ResultMessage onto an AgentResponse."""

    async def test_returns_result_text_and_cost(self) -> None:
        with patch(_QUERY, _mock_query(_make_result_message())):
            response = await ClaudeCodeAdapter(model="claude-x").send(_request())

        assert response.content == "Upgraded react to 19."
        assert response.cost_usd == 0.005

    async def test_counts_tool_use_blocks(self) -> None:
        messages = (
            _assistant_with_tool_uses(2),
            _assistant_with_tool_uses(1),
            _make_result_message(),
        )
        with patch(_QUERY, _mock_query(*messages)):
            response = await ClaudeCodeAdapter(model=None).send(_request())

        assert response.tool_calls == 3

    async def test_usage_includes_cache_tokens(self) -> None:
        usage = {
            "input_tokens": 100,
            "cache_read_input_tokens": 20,
            "cache_creation_input_tokens": 5,
            "output_tokens": 40,
        }
        with patch(_QUERY, _mock_query(_make_result_message(usage=usage))):
            response = await ClaudeCodeAdapter(model=None).send(_request())

        assert response.tokens_in == 125
        assert response.tokens_out == 40

    async def test_none_usage_maps_to_zero(self) -> None:
        with patch(_QUERY, _mock_query(_make_result_message(usage=None))):
            response = await ClaudeCodeAdapter(model=None).send(_request())

        assert (response.tokens_in, response.tokens_out) == (0, 0)

    async def test_options_root_session_in_workspace(self) -> None:
        mock = _mock_query(_make_result_message())
        with patch(_QUERY, mock):
            await ClaudeCodeAdapter(model="claude-x").send(_request(Path("/w/s")))

        options = mock.call_args.kwargs["options"]
        assert mock.call_args.kwargs["prompt"] == "Upgrade react."
        assert options.cwd == "/w/s"
        assert options.model == "claude-x"
        assert options.system_prompt == "You are a coder."
        assert options.max_turns == 12
        assert options.permission_mode == "bypassPermissions"


class TestSendErrors:
    """Every failure surfaces as AgentInvocationError."""

    async def test_is_error_raises(self) -> None:
        message = _make_result_message(is_error=True, result="rate limited")
        with patch(_QUERY, _mock_query(message)):
            with pytest.raises(AgentInvocationError, match="rate limited"):
                await ClaudeCodeAdapter(model=None).send(_request())

    async def test_none_result_raises(self) -> None:
        with patch(_QUERY, _mock_query(_make_result_message(result=None))):
            with pytest.raises(AgentInvocationError, match="no result text"):
                await ClaudeCodeAdapter(model=None).send(_request())

    async def test_missing_result_message_raises(self) -> None:
        with patch(_QUERY, _mock_query(_assistant_with_tool_uses(1))):
            with pytest.raises(AgentInvocationError, match="no ResultMessage"):
                await ClaudeCodeAdapter(model=None).send(_request())

    async def test_sdk_error_raises(self) -> None:
        mock = MagicMock(side_effect=ClaudeSDKError("CLI not found"))
        with patch(_QUERY, mock):
            with pytest.raises(AgentInvocationError, match="CLI not found"):
                await ClaudeCodeAdapter(model=None).send(_request())

    async def test_message_starts_with_failed(self) -> None:
        with patch(_QUERY, _mock_query()):
            with pytest.raises(AgentInvocationError) as exc_info:
                await ClaudeCodeAdapter(model=None).send(_request())

        assert str(exc_info.value).startswith("Failed to ")
