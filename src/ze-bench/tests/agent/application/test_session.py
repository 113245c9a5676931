"""Tests for AgentSession."""

import json
from pathlib import Path

from ze_bench.agent.application.session import AgentSession, build_messages
from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.agent.domain.request import AgentResponse
from ze_bench.agent.infrastructure.errors import AgentInvocationError
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.tools.application.bridge import ToolBridge
from tests.agent.fake_adapter import FakeAdapterFactory, FakeAgentAdapter
from tests.agent.fake_observer import FakeAgentObserver
from tests.tools.fake_observer import FakeToolObserver


def _combination(
    agent: AgentBackend = AgentBackend.ANTHROPIC, model: str | None = "claude-x"
) -> BenchmarkCombination:
    return BenchmarkCombination(
        suite="pnpm", scenario="upgrade", tier="L1", agent=agent, model=model
    )


def _make_session(
    factory: FakeAdapterFactory,
) -> tuple[AgentSession, FakeAgentObserver]:
    observer = FakeAgentObserver()
    session = AgentSession(
        adapter_factory=factory, observer=observer, max_turns=7, max_tokens=512
    )
    return session, observer


class TestRunSuccess:
    """A successful invocation returns the response with captured telemetry."""

    async def test_returns_response(self, tmp_path: Path) -> None:
        response = AgentResponse(content="ok", tokens_in=5, tokens_out=3, tool_calls=2)
        factory = FakeAdapterFactory(adapter=FakeAgentAdapter(response=response))
        session, observer = _make_session(factory)

        result = await session.run(
            combination=_combination(), workspace_dir=tmp_path, prompt_text="Upgrade"
        )

        assert result.ok
        assert result.response == response
        assert observer.invocation_completed[0].tool_calls == 2

    async def test_prompt_sent_is_serialized_messages(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory()
        session, _ = _make_session(factory)

        result = await session.run(
            combination=_combination(), workspace_dir=tmp_path, prompt_text="Upgrade"
        )

        messages = json.loads(result.prompt_sent)
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[1]["content"] == "Upgrade"

    async def test_request_carries_limits_and_model(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory()
        session, _ = _make_session(factory)

        await session.run(
            combination=_combination(), workspace_dir=tmp_path, prompt_text="Upgrade"
        )

        [request] = factory.adapter.requests
        assert request.model == "claude-x"
        assert request.max_turns == 7
        assert request.max_tokens == 512
        assert request.workspace_dir == tmp_path
        assert factory.created == [(AgentBackend.ANTHROPIC, "claude-x")]


class TestTools:
    """Tools are rendered for tool-capable backends only."""

    async def test_anthropic_gets_native_tools(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory()
        session, observer = _make_session(factory)
        toolkit = ToolBridge(observer=FakeToolObserver()).build(workspace_dir=tmp_path)

        await session.run(
            combination=_combination(),
            workspace_dir=tmp_path,
            prompt_text="Upgrade",
            toolkit=toolkit,
        )

        [request] = factory.adapter.requests
        assert [t["name"] for t in request.tools] == toolkit.tool_names
        assert request.tool_executor is toolkit
        assert observer.invocation_started[0].tool_count == 4

    async def test_openrouter_gets_function_tools(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory()
        session, _ = _make_session(factory)
        toolkit = ToolBridge(observer=FakeToolObserver()).build(workspace_dir=tmp_path)

        await session.run(
            combination=_combination(agent=AgentBackend.OPENROUTER, model="x/y"),
            workspace_dir=tmp_path,
            prompt_text="Upgrade",
            toolkit=toolkit,
        )

        [request] = factory.adapter.requests
        assert all(t["type"] == "function" for t in request.tools)

    async def test_claude_code_gets_no_tools(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory()
        session, _ = _make_session(factory)
        toolkit = ToolBridge(observer=FakeToolObserver()).build(workspace_dir=tmp_path)

        await session.run(
            combination=_combination(agent=AgentBackend.CLAUDE_CODE),
            workspace_dir=tmp_path,
            prompt_text="Upgrade",
            toolkit=toolkit,
        )

        [request] = factory.adapter.requests
        assert request.tools == []
        assert request.tool_executor is None


class TestRunFailure:
    """Adapter failures of any kind come back as SessionResult.error."""

    async def test_invocation_error_is_contained(self, tmp_path: Path) -> None:
        adapter = FakeAgentAdapter(error=AgentInvocationError(reason="rate limited"))
        session, observer = _make_session(FakeAdapterFactory(adapter=adapter))

        result = await session.run(
            combination=_combination(), workspace_dir=tmp_path, prompt_text="Upgrade"
        )

        assert not result.ok
        assert result.response is None
        assert result.error is not None
        assert result.error.reason == "rate limited"
        assert observer.invocation_failed[0].reason == "rate limited"

    async def test_unexpected_error_is_wrapped(self, tmp_path: Path) -> None:
        adapter = FakeAgentAdapter(error=RuntimeError("socket closed"))
        session, _ = _make_session(FakeAdapterFactory(adapter=adapter))

        result = await session.run(
            combination=_combination(), workspace_dir=tmp_path, prompt_text="Upgrade"
        )

        assert isinstance(result.error, AgentInvocationError)
        assert "RuntimeError: socket closed" in str(result.error)
        assert result.prompt_sent != ""

    async def test_factory_error_is_contained(self, tmp_path: Path) -> None:
        factory = FakeAdapterFactory(
            create_error=AgentInvocationError(reason="openrouter requires a model")
        )
        session, _ = _make_session(factory)

        result = await session.run(
            combination=_combination(agent=AgentBackend.OPENROUTER, model=None),
            workspace_dir=tmp_path,
            prompt_text="Upgrade",
        )

        assert result.error is not None
        assert "requires a model" in result.error.reason


class TestBuildMessages:
    def test_lists_tools_in_system_message(self, tmp_path: Path) -> None:
        system, user = build_messages(
            workspace_dir=tmp_path, prompt_text="Go", tool_names=["readFile"]
        )
        assert str(tmp_path) in system.content
        assert "readFile" in system.content
        assert user.content == "Go"

    def test_no_tools_sentence_without_tools(self, tmp_path: Path) -> None:
        system, _ = build_messages(workspace_dir=tmp_path, prompt_text="Go", tool_names=[])
        assert "Available tools" not in system.content
