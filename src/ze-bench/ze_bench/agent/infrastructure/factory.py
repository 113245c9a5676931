"""BackendAdapterFactory — maps an AgentBackend to its adapter implementation."""

from typing import assert_never

import anthropic

from ze_bench.agent.domain.adapter import AgentAdapter
from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.agent.infrastructure.anthropic_adapter import AnthropicAdapter
from ze_bench.agent.infrastructure.claude_sdk import ClaudeCodeAdapter
from ze_bench.agent.infrastructure.echo import EchoAdapter
from ze_bench.agent.infrastructure.errors import (
    AgentBackendNotSupportedError,
    AgentInvocationError,
)
from ze_bench.agent.infrastructure.litellm_adapter import OpenRouterAdapter
from ze_bench.config.domain.agent import AgentsConfig


def parse_backend(name: str) -> AgentBackend:
    """
    Raises:
        AgentBackendNotSupportedError: if name is not a known backend.
    """
    try:
        return AgentBackend(name)
    except ValueError as exc:
        raise AgentBackendNotSupportedError(backend=name) from exc


class BackendAdapterFactory:
    """Satisfies the AgentAdapterFactory protocol for the built-in backends."""

    def __init__(self, config: AgentsConfig) -> None:
        self._config = config

    def create(self, backend: AgentBackend, model: str | None) -> AgentAdapter:
        """
        Raises:
            AgentInvocationError: if a model-using backend is given no model.
        """
        match backend:
            case AgentBackend.ECHO:
                return EchoAdapter()
            case AgentBackend.ANTHROPIC:
                client = anthropic.AsyncAnthropic(
                    api_key=self._config.anthropic_api_key or None
                )
                return AnthropicAdapter(client=client, model=model)
            case AgentBackend.OPENROUTER:
                if not model:
                    raise AgentInvocationError(reason="openrouter requires a model")
                return OpenRouterAdapter(
                    model=model, api_key=self._config.openrouter_api_key
                )
            case AgentBackend.CLAUDE_CODE:
                return ClaudeCodeAdapter(model=model)
            case _:
                assert_never(backend)
