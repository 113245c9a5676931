"""ToolBridge — assembles the tool inventory an agent session may call."""

from pathlib import Path
from typing import Any

from ze_bench.tools.domain.observer import ToolObserver
from ze_bench.tools.domain.oracle import Oracle, QuestionAnswer
from ze_bench.tools.domain.tool import ToolDefinition, ToolHandler
from ze_bench.tools.infrastructure.errors import ToolInputError
from ze_bench.tools.infrastructure.workspace_tools import WorkspaceTools

ASK_USER = ToolDefinition(
    name="askUser",
    description=(
        "Ask the user a question when you need clarification or approval for"
        " major changes. Use this sparingly - only for important decisions like"
        " major version upgrades or ambiguous requirements."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "question": {
                "type": "string",
                "description": "The question to ask the user. Be specific and concise.",
            },
            "context": {
                "type": "string",
                "description": "Optional context about why you are asking this question.",
            },
        },
        "required": ["question"],
    },
)


class Toolkit:
    """Tool definitions plus handlers for one session, and the oracle audit log."""

    def __init__(
        self, tools: list[ToolDefinition], handlers: dict[str, ToolHandler]
    ) -> None:
        self.tools = tools
        self.handlers = handlers
        self._question_log: list[QuestionAnswer] = []

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def question_log(self) -> list[QuestionAnswer]:
        return list(self._question_log)

    def record_question(self, question: str, answer: str) -> None:
        self._question_log.append(QuestionAnswer(question=question, answer=answer))

    async def invoke(self, name: str, tool_input: dict[str, Any]) -> str:
        """Call a handler by name; failures come back as ``Error: ...`` strings."""
        handler = self.handlers.get(name)
        if handler is None:
            return f"Error: unknown tool '{name}'"
        try:
            return await handler(tool_input)
        except ToolInputError as exc:
            return f"Error: {exc.reason}"
        except (OSError, ValueError) as exc:
            return f"Error: {exc}"


class ToolBridge:
    """Builds a Toolkit scoped to a workspace, with askUser when an oracle exists."""

    def __init__(self, observer: ToolObserver) -> None:
        self._observer = observer

    def build(self, workspace_dir: Path, oracle: Oracle | None = None) -> Toolkit:
        workspace_tools = WorkspaceTools(
            workspace_dir=workspace_dir, observer=self._observer
        )
        tools = workspace_tools.definitions()
        handlers = workspace_tools.handlers()
        toolkit = Toolkit(tools=tools, handlers=handlers)

        if oracle is not None:

            async def ask_user(tool_input: dict[str, Any]) -> str:
                question = tool_input.get("question")
                if not isinstance(question, str):
                    raise ToolInputError(
                        tool_name=ASK_USER.name, reason="'question' must be a string"
                    )
                answer = oracle.ask(question)
                toolkit.record_question(question=question, answer=answer)
                return answer

            tools.append(ASK_USER)
            handlers[ASK_USER.name] = ask_user

        return toolkit
