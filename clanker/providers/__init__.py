"""LLM providers module."""

from clanker.providers.base import LLMProvider, LLMResponse, ToolCallRequest
from clanker.providers.litellm_provider import LiteLLMProvider

__all__ = ["LLMProvider", "LLMResponse", "ToolCallRequest", "LiteLLMProvider"]
