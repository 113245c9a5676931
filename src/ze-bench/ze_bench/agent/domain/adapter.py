"""AgentAdapter and AgentAdapterFactory Protocols — backend client ports."""

from typing import Protocol

from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.agent.domain.request import AgentRequest, AgentResponse


class AgentAdapter(Protocol):
    """One backend client. send() may raise; AgentSession contains it."""

    @property
    def name(self) -> str: ...

    async def send(self, request: AgentRequest) -> AgentResponse: ...


class AgentAdapterFactory(Protocol):
    def create(self, backend: AgentBackend, model: str | None) -> AgentAdapter: ...
