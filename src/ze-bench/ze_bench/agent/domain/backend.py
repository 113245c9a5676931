"""AgentBackend — the closed set of agent backends the harness can drive."""

from enum import StrEnum

from ze_bench.tools.domain.tool import ToolFormat


class AgentBackend(StrEnum):
    ECHO = "echo"
    ANTHROPIC = "anthropic"
    OPENROUTER = "openrouter"
    CLAUDE_CODE = "claude-code"

    @property
    def ignores_model(self) -> bool:
        """True when the backend never consults a model name."""
        return self is AgentBackend.ECHO

    @property
    def supports_tools(self) -> bool:
        """True when workspace tools are attached to the request.

        claude-code brings its own file and shell tools and runs in the
        workspace directly, so the harness tools are not attached.
        """
        return self in (AgentBackend.ANTHROPIC, AgentBackend.OPENROUTER)

    @property
    def tool_format(self) -> ToolFormat:
        if self is AgentBackend.OPENROUTER:
            return ToolFormat.OPENAI_FUNCTION
        return ToolFormat.NATIVE
