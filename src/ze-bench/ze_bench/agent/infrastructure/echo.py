"""EchoAdapter — the no-op backend used for harness smoke runs."""

from ze_bench.agent.domain.request import AgentRequest, AgentResponse


class EchoAdapter:
    """Never calls a model; answers every request with empty content."""

    @property
    def name(self) -> str:
        return "echo"

    async def send(self, request: AgentRequest) -> AgentResponse:
        return AgentResponse(content="")
