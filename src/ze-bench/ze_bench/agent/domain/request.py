"""Agent request/response value objects exchanged with backend adapters."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Protocol

from pydantic import BaseModel


class ToolExecutor(Protocol):
    """Runs a named tool on behalf of the model and returns its text result."""

    async def invoke(self, name: str, tool_input: dict[str, Any]) -> str: ...


class AgentMessage(BaseModel, frozen=True):
    role: Literal["system", "user"]
    content: str


@dataclass(frozen=True)
class AgentRequest:
    """Everything an adapter needs for one invocation.

    ``tools`` are already rendered in the backend's wire shape;
    ``tool_executor`` is None when no tools are attached.
    """

    messages: list[AgentMessage]
    workspace_dir: Path
    model: str | None = None
    tools: list[dict[str, Any]] = field(default_factory=list)
    tool_executor: ToolExecutor | None = None
    max_turns: int = 25
    max_tokens: int = 4096

    @property
    def system_prompt(self) -> str:
        return "\n\n".join(m.content for m in self.messages if m.role == "system")

    @property
    def user_prompt(self) -> str:
        return "\n\n".join(m.content for m in self.messages if m.role == "user")


class AgentResponse(BaseModel, frozen=True):
    """Final content of an invocation plus the telemetry it produced."""

    content: str
    tokens_in: int = 0
    tokens_out: int = 0
    cost_usd: float | None = None
    tool_calls: int = 0
