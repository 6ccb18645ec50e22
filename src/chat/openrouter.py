"""OpenRouterChatClient — chat relay through OpenRouter's OpenAI-compatible API."""
import logging

from openai import AsyncOpenAI, OpenAIError

from src.chat.client import ChatClient, ChatRelayError
from src.constants import (
    MSG_ERR_AI_EMPTY,
    MSG_ERR_AI_FAILED,
    MSG_ERR_AI_NOT_CONFIGURED,
    MSG_ERR_NO_MESSAGES,
    OPENROUTER_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)

logger = logging.getLogger(__name__)

_FORWARDED_KEYS = ("tools", "tool_choice", "temperature", "max_tokens", "top_p")


class OpenRouterChatClient(ChatClient):

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def complete(self, request: dict) -> dict:
        messages = request.get("messages") or []
        match messages:
            case []:
                raise ValueError(MSG_ERR_NO_MESSAGES)
            case _:
                pass
        model = request.get("model") or OPENROUTER_DEFAULT_MODEL
        extra = {k: request[k] for k in _FORWARDED_KEYS if request.get(k) is not None}
        logger.info(
            "Processing AI request (model=%s, messages=%d, tools=%d)",
            model, len(messages), len(extra.get("tools", [])),
        )

        client = AsyncOpenAI(api_key=self._api_key, base_url=OPENROUTER_BASE_URL)
        try:
            response = await client.chat.completions.create(
                model=model, messages=messages, **extra
            )
        except OpenAIError as exc:
            logger.error("Failed to create chat completion: %s", exc)
            raise ChatRelayError(MSG_ERR_AI_FAILED) from exc

        match response.choices:
            case [first, *_]:
                message = first.message
            case _:
                logger.error("No choices returned from OpenRouter")
                raise ChatRelayError(MSG_ERR_AI_EMPTY)
        match message.tool_calls:
            case [_, *_] as calls:
                logger.info("AI request completed with tool calls (%d)", len(calls))
            case _:
                logger.info("AI request completed (%d chars)", len(message.content or ""))
        return message.model_dump(exclude_none=True)


async def handle_chat(client: ChatClient | None, request: dict) -> tuple[int, dict]:
    """Run one relay request and map the outcome to (status, payload)."""
    match client:
        case None:
            return 500, {"error": MSG_ERR_AI_NOT_CONFIGURED}
        case _:
            pass
    try:
        return 200, {"message": await client.complete(request)}
    except ValueError as exc:
        return 400, {"error": str(exc)}
    except ChatRelayError as exc:
        return 500, {"error": str(exc)}
