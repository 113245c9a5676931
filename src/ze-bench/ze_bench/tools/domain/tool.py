"""ToolDefinition value object and backend wire-shape rendering."""

from collections.abc import Awaitable, Callable, Sequence
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

type ToolHandler = Callable[[dict[str, Any]], Awaitable[str]]


class ToolFormat(StrEnum):
    """Wire shape a backend expects tool declarations in."""

    NATIVE = "native"
    OPENAI_FUNCTION = "openai_function"


class ToolDefinition(BaseModel, frozen=True):
    """Backend-agnostic tool declaration; rendered only when a request is built."""

    name: str = Field(min_length=1)
    description: str
    input_schema: dict[str, Any]


def render_tools(
    tools: Sequence[ToolDefinition], tool_format: ToolFormat
) -> list[dict[str, Any]]:
    """Translate tool definitions into a backend's wire shape. Pure and lossless."""
    match tool_format:
        case ToolFormat.NATIVE:
            return [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.input_schema,
                }
                for tool in tools
            ]
        case ToolFormat.OPENAI_FUNCTION:
            return [
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": tool.input_schema,
                    },
                }
                for tool in tools
            ]
