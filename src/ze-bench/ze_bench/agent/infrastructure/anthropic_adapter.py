"""AnthropicAdapter — drives the Anthropic Messages API with a tool-calling loop."""

from typing import Any

import anthropic

from ze_bench.agent.domain.request import AgentRequest, AgentResponse
from ze_bench.agent.infrastructure.errors import AgentInvocationError
from ze_bench.agent.infrastructure.pricing import estimate_cost_usd

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
MAX_TURNS_REACHED = "Max tool calling iterations reached"


class AnthropicAdapter:
    """Sends the request, runs requested tools, and feeds results back.

    The loop ends when the model replies without a tool_use block or after
    ``request.max_turns`` round trips, whichever comes first.
    """

    def __init__(self, client: anthropic.AsyncAnthropic, model: str | None) -> None:
        self._client = client
        self._model = model or DEFAULT_MODEL

    @property
    def name(self) -> str:
        return "anthropic"

    async def send(self, request: AgentRequest) -> AgentResponse:
        """
        Raises:
            AgentInvocationError: if the API call fails.
        """
        messages: list[dict[str, Any]] = [
            {"role": "user", "content": request.user_prompt}
        ]
        tokens_in = 0
        tokens_out = 0
        tool_calls = 0
        last_text = MAX_TURNS_REACHED

        for _ in range(request.max_turns):
            kwargs: dict[str, Any] = {
                "model": self._model,
                "max_tokens": request.max_tokens,
                "messages": messages,
            }
            if request.system_prompt:
                kwargs["system"] = request.system_prompt
            if request.tools:
                kwargs["tools"] = request.tools

            try:
                response = await self._client.messages.create(**kwargs)
            except anthropic.APIError as exc:
                raise AgentInvocationError(reason=str(exc)) from exc

            tokens_in += response.usage.input_tokens
            tokens_out += response.usage.output_tokens

            text = "".join(
                block.text for block in response.content if block.type == "text"
            )
            if text:
                last_text = text
            tool_uses = [block for block in response.content if block.type == "tool_use"]
            if not tool_uses or request.tool_executor is None:
                return self._response(
                    content=text,
                    tokens_in=tokens_in,
                    tokens_out=tokens_out,
                    tool_calls=tool_calls,
                )

            tool_calls += len(tool_uses)
            results = []
            for tool_use in tool_uses:
                output = await request.tool_executor.invoke(
                    name=tool_use.name, tool_input=dict(tool_use.input)
                )
                results.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": tool_use.id,
                        "content": output,
                    }
                )
            messages.append({"role": "assistant", "content": response.content})
            messages.append({"role": "user", "content": results})

        return self._response(
            content=last_text,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            tool_calls=tool_calls,
        )

    def _response(
        self, content: str, tokens_in: int, tokens_out: int, tool_calls: int
    ) -> AgentResponse:
        return AgentResponse(
            content=content,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            cost_usd=estimate_cost_usd(
                model=self._model, tokens_in=tokens_in, tokens_out=tokens_out
            ),
            tool_calls=tool_calls,
        )
