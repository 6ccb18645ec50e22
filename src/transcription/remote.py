"""Shared plumbing for backends that talk to a remote HTTP API.

Every backend funnels its single outbound call through ``post`` so that
transport failures, non-200 statuses and undecodable bodies surface as the
same typed errors regardless of the wire format.
"""
import json
import logging
from typing import Any, Optional

import httpx

from src.transcription.errors import (
    NetworkFailure,
    NonOKStatus,
    RequestConstructionFailed,
    ResponseDecodeFailed,
)
from src.transcription.types import AudioFormat, TranscriptionOptions

logger = logging.getLogger(__name__)


def check_request(provider: str, audio: bytes, opts: TranscriptionOptions) -> None:
    match audio:
        case b"" | None:
            raise RequestConstructionFailed(provider, "audio data is empty")
        case _:
            pass
    try:
        AudioFormat(opts.metadata.format)
    except ValueError:
        raise RequestConstructionFailed(
            provider, f"unsupported audio format: {opts.metadata.format!r}"
        ) from None


async def post(
    provider: str,
    url: str,
    *,
    timeout: float,
    http_client: Optional[httpx.AsyncClient] = None,
    **request: Any,
) -> Any:
    """POST once and return the decoded JSON body of a 200 response."""
    try:
        match http_client:
            case None:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(url, **request)
            case client:
                response = await client.post(url, timeout=timeout, **request)
    except httpx.TimeoutException as exc:
        raise NetworkFailure(provider, f"request timed out after {timeout}s") from exc
    except httpx.TransportError as exc:
        raise NetworkFailure(provider, f"failed to call API: {exc}") from exc
    except httpx.DecodingError as exc:
        raise ResponseDecodeFailed(provider, f"failed to decode response body: {exc}") from exc
    except httpx.RequestError as exc:
        raise NetworkFailure(provider, f"request failed: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise RequestConstructionFailed(provider, f"failed to build request: {exc}") from exc

    match response.status_code:
        case 200:
            pass
        case status:
            logger.debug("%s returned %d", provider, status)
            raise NonOKStatus(provider, status, response.text)

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ResponseDecodeFailed(provider, f"failed to parse response: {exc}") from exc
