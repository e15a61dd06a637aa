"""Tests for LiteLLM Provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from clanker.errors import InferenceError
from clanker.providers.litellm_provider import DEFAULT_MODEL, LiteLLMProvider


@pytest.fixture
def provider():
    """Create a default provider."""
    return LiteLLMProvider(api_key="test-key", default_model="test/model")


def _response(content=None, tool_calls=None, finish_reason="stop"):
    mock_response = MagicMock()
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_choice.message.tool_calls = tool_calls
    mock_choice.finish_reason = finish_reason
    mock_response.choices = [mock_choice]
    mock_response.usage = None
    return mock_response


def _tool_call(call_id, name, arguments):
    tc = MagicMock()
    tc.id = call_id
    tc.function.name = name
    tc.function.arguments = arguments
    return tc


@pytest.mark.asyncio
async def test_chat_basic(provider):
    """Text-only completion without tools."""
    mock_response = _response(content="Hello there!")
    mock_response.usage = MagicMock(prompt_tokens=10, completion_tokens=20, total_tokens=30)

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = mock_response

        response = await provider.chat([{"role": "user", "content": "Hi"}])

        mock_acompletion.assert_called_once()
        kwargs = mock_acompletion.call_args.kwargs
        assert kwargs["model"] == "test/model"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["messages"] == [{"role": "user", "content": "Hi"}]
        assert "tools" not in kwargs
        assert "api_base" not in kwargs

    assert response.content == "Hello there!"
    assert not response.has_tool_calls
    assert response.finish_reason == "stop"
    assert response.usage == {
        "prompt_tokens": 10,
        "completion_tokens": 20,
        "total_tokens": 30,
    }


@pytest.mark.asyncio
async def test_chat_with_tool_calls(provider):
    """Tool calls are parsed in order; bad JSON survives as a raw argument."""
    mock_response = _response(
        tool_calls=[
            _tool_call("call_1", "write_file", '{"path": "a.txt", "content": "hi"}'),
            _tool_call("call_2", "bad_json_tool", "not valid json"),
            _tool_call(None, "read_file", {"path": "b.txt"}),
        ],
        finish_reason="tool_calls",
    )
    tools_schema = [{"type": "function", "function": {"name": "write_file"}}]

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = mock_response

        response = await provider.chat(
            [{"role": "user", "content": "write it"}],
            tools=tools_schema,
            model="specific/model",
        )

        assert mock_acompletion.call_args.kwargs["model"] == "specific/model"
        assert mock_acompletion.call_args.kwargs["tools"] == tools_schema

    assert response.has_tool_calls
    assert [tc.name for tc in response.tool_calls] == ["write_file", "bad_json_tool", "read_file"]
    assert response.tool_calls[0].arguments == {"path": "a.txt", "content": "hi"}
    assert response.tool_calls[1].arguments == {"raw": "not valid json"}
    assert response.tool_calls[2].arguments == {"path": "b.txt"}
    assert response.tool_calls[2].id == "call_2"


@pytest.mark.asyncio
async def test_chat_empty_argument_string(provider):
    mock_response = _response(tool_calls=[_tool_call("c", "noop", "")])

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = mock_response
        response = await provider.chat([{"role": "user", "content": "go"}])

    assert response.tool_calls[0].arguments == {}


@pytest.mark.asyncio
async def test_chat_non_object_arguments_kept_raw(provider):
    mock_response = _response(tool_calls=[_tool_call("c", "read_file", "[\"a.txt\"]")])

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = mock_response
        response = await provider.chat([{"role": "user", "content": "go"}])

    assert response.tool_calls[0].arguments == {"raw": "[\"a.txt\"]"}


@pytest.mark.asyncio
async def test_chat_passes_api_base():
    provider = LiteLLMProvider(api_base="http://localhost:4000")

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = _response(content="ok")
        await provider.chat([{"role": "user", "content": "Hi"}])

        kwargs = mock_acompletion.call_args.kwargs
        assert kwargs["api_base"] == "http://localhost:4000"
        assert "api_key" not in kwargs
        assert kwargs["model"] == DEFAULT_MODEL


@pytest.mark.asyncio
async def test_chat_failure_raises_inference_error(provider):
    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.side_effect = ConnectionError("network down")

        with pytest.raises(InferenceError, match="network down") as exc_info:
            await provider.chat([{"role": "user", "content": "Hi"}])

    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_chat_without_choices_raises(provider):
    mock_response = MagicMock()
    mock_response.choices = []

    with patch("litellm.acompletion", new_callable=AsyncMock) as mock_acompletion:
        mock_acompletion.return_value = mock_response

        with pytest.raises(InferenceError, match="no candidates"):
            await provider.chat([{"role": "user", "content": "Hi"}])


def test_get_default_model(provider):
    assert provider.get_default_model() == "test/model"
