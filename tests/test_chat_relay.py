"""TDD: chat relay tests written FIRST"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from openai import OpenAIError

from src.chat.client import ChatClient, ChatRelayError
from src.chat.openrouter import OpenRouterChatClient, handle_chat


def make_response(content: str = "hi", tool_calls=None) -> MagicMock:
    message = MagicMock()
    message.content = content
    message.tool_calls = tool_calls
    message.model_dump.return_value = {"role": "assistant", "content": content}
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def patched_openai(response=None, error=None):
    mock_openai = MagicMock()
    mock_openai.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    return patch("src.chat.openrouter.AsyncOpenAI", return_value=mock_openai), mock_openai


def test_openrouter_client_implements_abc():
    assert issubclass(OpenRouterChatClient, ChatClient)


async def test_complete_returns_first_message():
    patcher, _ = patched_openai(make_response("hello there"))

    with patcher:
        message = await OpenRouterChatClient("key").complete(
            {"messages": [{"role": "user", "content": "hi"}]}
        )

    assert message == {"role": "assistant", "content": "hello there"}


async def test_complete_points_sdk_at_openrouter():
    patcher, _ = patched_openai(make_response())

    with patcher as mock_cls:
        await OpenRouterChatClient("or-key").complete({"messages": [{"role": "user", "content": "x"}]})

    kwargs = mock_cls.call_args.kwargs
    assert kwargs["api_key"] == "or-key"
    assert kwargs["base_url"] == "https://openrouter.ai/api/v1"


async def test_complete_defaults_model():
    patcher, mock_openai = patched_openai(make_response())

    with patcher:
        await OpenRouterChatClient("key").complete({"messages": [{"role": "user", "content": "x"}]})

    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "meta-llama/llama-3.3-70b-instruct"
    assert "tools" not in kwargs


async def test_complete_forwards_model_and_tools():
    patcher, mock_openai = patched_openai(make_response(tool_calls=[MagicMock()]))
    tools = [{"type": "function", "function": {"name": "lookup", "parameters": {}}}]

    with patcher:
        await OpenRouterChatClient("key").complete(
            {"model": "openai/gpt-4o", "messages": [{"role": "user", "content": "x"}], "tools": tools}
        )

    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "openai/gpt-4o"
    assert kwargs["tools"] == tools


async def test_complete_requires_messages():
    with pytest.raises(ValueError, match="Messages are required"):
        await OpenRouterChatClient("key").complete({"messages": []})


async def test_complete_no_choices_raises():
    response = make_response()
    response.choices = []
    patcher, _ = patched_openai(response)

    with patcher:
        with pytest.raises(ChatRelayError, match="No response from AI model"):
            await OpenRouterChatClient("key").complete({"messages": [{"role": "user", "content": "x"}]})


async def test_complete_sdk_error_is_wrapped():
    patcher, _ = patched_openai(error=OpenAIError("rate limited"))

    with patcher:
        with pytest.raises(ChatRelayError, match="Failed to process AI request"):
            await OpenRouterChatClient("key").complete({"messages": [{"role": "user", "content": "x"}]})


# ── handle_chat ───────────────────────────────────────────────────────────────


async def test_handle_chat_success():
    client = MagicMock()
    client.complete = AsyncMock(return_value={"role": "assistant", "content": "ok"})

    status, payload = await handle_chat(client, {"messages": [{"role": "user", "content": "x"}]})

    assert status == 200
    assert payload == {"message": {"role": "assistant", "content": "ok"}}


async def test_handle_chat_bad_request():
    status, payload = await handle_chat(OpenRouterChatClient("key"), {"messages": []})

    assert status == 400
    assert payload == {"error": "Messages are required"}


async def test_handle_chat_upstream_failure():
    client = MagicMock()
    client.complete = AsyncMock(side_effect=ChatRelayError("No response from AI model"))

    status, payload = await handle_chat(client, {"messages": [{"role": "user", "content": "x"}]})

    assert status == 500
    assert payload["error"] == "No response from AI model"


async def test_handle_chat_not_configured():
    status, payload = await handle_chat(None, {"messages": []})

    assert status == 500
    assert "not configured" in payload["error"]


async def test_handle_chat_error_body_without_choices():
    """OpenRouter answers 200 with only an error object; the SDK leaves choices unset."""
    response = make_response()
    response.choices = None
    patcher, _ = patched_openai(response)

    with patcher:
        status, payload = await handle_chat(
            OpenRouterChatClient("key"), {"messages": [{"role": "user", "content": "x"}]}
        )

    assert status == 500
    assert payload == {"error": "No response from AI model"}
