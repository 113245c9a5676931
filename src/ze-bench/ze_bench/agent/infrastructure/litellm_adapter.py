"""OpenRouterAdapter — OpenAI-compatible chat completions via LiteLLM."""

import json
from typing import Any

import litellm

from ze_bench.agent.domain.request import AgentRequest, AgentResponse
from ze_bench.agent.infrastructure.errors import AgentInvocationError
from ze_bench.agent.infrastructure.pricing import estimate_cost_usd

MAX_TURNS_REACHED = "Max tool calling iterations reached"


class OpenRouterAdapter:
    """Routes requests to OpenRouter through ``litellm.acompletion``.

    Tools arrive pre-rendered in the OpenAI function shape. Each assistant
    tool call is executed and answered with a ``tool`` message until the model
    stops calling tools or ``request.max_turns`` is reached.
    """

    def __init__(self, model: str, api_key: str | None = None) -> None:
        self._model = f"openrouter/{model}"
        self._api_key = api_key or None

    @property
    def name(self) -> str:
        return "openrouter"

    async def send(self, request: AgentRequest) -> AgentResponse:
        """
        Raises:
            AgentInvocationError: if the completion call fails.
        """
        messages: list[dict[str, Any]] = [
            {"role": m.role, "content": m.content} for m in request.messages
        ]
        tokens_in = 0
        tokens_out = 0
        tool_calls = 0
        last_text = MAX_TURNS_REACHED

        for _ in range(request.max_turns):
            kwargs: dict[str, Any] = {
                "model": self._model,
                "messages": messages,
                "max_tokens": request.max_tokens,
            }
            if request.tools:
                kwargs["tools"] = request.tools
            if self._api_key:
                kwargs["api_key"] = self._api_key

            try:
                response = await litellm.acompletion(**kwargs)
            except Exception as exc:
                raise AgentInvocationError(reason=str(exc)) from exc

            usage = getattr(response, "usage", None)
            if usage is not None:
                tokens_in += usage.prompt_tokens or 0
                tokens_out += usage.completion_tokens or 0

            message = response.choices[0].message
            if message.content:
                last_text = message.content
            requested = message.tool_calls or []
            if not requested or request.tool_executor is None:
                return self._response(
                    content=message.content or "",
                    tokens_in=tokens_in,
                    tokens_out=tokens_out,
                    tool_calls=tool_calls,
                )

            tool_calls += len(requested)
            messages.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments,
                            },
                        }
                        for call in requested
                    ],
                }
            )
            for call in requested:
                output = await self._invoke(request=request, call=call)
                messages.append(
                    {"role": "tool", "tool_call_id": call.id, "content": output}
                )

        return self._response(
            content=last_text,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            tool_calls=tool_calls,
        )

    async def _invoke(self, request: AgentRequest, call: Any) -> str:
        assert request.tool_executor is not None  # checked by send()
        try:
            arguments = json.loads(call.function.arguments or "{}")
        except json.JSONDecodeError as exc:
            return f"Error: tool arguments are not valid JSON ({exc})"
        if not isinstance(arguments, dict):
            return "Error: tool arguments must be a JSON object"
        return await request.tool_executor.invoke(
            name=call.function.name, tool_input=arguments
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
