"""Inference client backed by LiteLLM."""

import json
from typing import Any

import litellm
from loguru import logger

from clanker.errors import InferenceError
from clanker.providers.base import LLMProvider, LLMResponse, ToolCallRequest

DEFAULT_MODEL = "gemini/gemini-3-flash-preview"


class LiteLLMProvider(LLMProvider):
    """
    One request per call through ``litellm.acompletion``.

    The default model routes to the Gemini API. Other LiteLLM routes work
    by changing the model string; the request and response shapes stay
    the same.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        default_model: str = DEFAULT_MODEL,
    ):
        super().__init__(api_key, api_base)
        self._default_model = default_model

    async def chat(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
        max_tokens: int = 8192,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """
        Generate the next model turn for ``messages``.

        Raises:
            InferenceError: The request failed or produced no candidate.
        """
        use_model = model or self._default_model
        request: dict[str, Any] = {
            "model": use_model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if self.api_key:
            request["api_key"] = self.api_key
        if self.api_base:
            request["api_base"] = self.api_base
        if tools:
            request["tools"] = tools

        logger.debug(f"Inference request: model={use_model}, turns={len(messages)}, tools={len(tools or [])}")

        try:
            response = await litellm.acompletion(**request)
        except Exception as e:
            raise InferenceError(f"{type(e).__name__}: {e}") from e

        if not response.choices:
            raise InferenceError("Model returned no candidates")

        candidate = response.choices[0]
        tool_calls = _tool_calls(candidate.message.tool_calls or [])
        logger.debug(f"Inference response: finish_reason={candidate.finish_reason}, function_calls={len(tool_calls)}")

        return LLMResponse(
            content=candidate.message.content,
            tool_calls=tool_calls,
            finish_reason=candidate.finish_reason or "stop",
            usage=_usage(response),
        )

    def get_default_model(self) -> str:
        return self._default_model


def _tool_calls(raw_calls: list[Any]) -> list[ToolCallRequest]:
    calls = []
    for index, raw in enumerate(raw_calls):
        calls.append(
            ToolCallRequest(
                # Gemini routes may omit ids; results are matched by id
                id=raw.id or f"call_{index}",
                name=raw.function.name,
                arguments=_arguments(raw.function.arguments),
            )
        )
    return calls


def _arguments(raw: Any) -> dict[str, Any]:
    """Decode function-call arguments; anything but a JSON object is kept under ``raw``."""
    if isinstance(raw, dict):
        return raw
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        return {"raw": raw}
    return decoded if isinstance(decoded, dict) else {"raw": raw}


def _usage(response: Any) -> dict[str, int]:
    usage = getattr(response, "usage", None)
    if not usage:
        return {}
    return {
        "prompt_tokens": usage.prompt_tokens or 0,
        "completion_tokens": usage.completion_tokens or 0,
        "total_tokens": usage.total_tokens or 0,
    }
