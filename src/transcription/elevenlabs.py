"""ElevenLabsTranscriptionClient — ElevenLabs scribe speech-to-text backend."""
import logging
from typing import Optional

import httpx

from src.constants import (
    ELEVENLABS_FILENAME_PCM,
    ELEVENLABS_FILENAME_WAV,
    ELEVENLABS_FORMAT_OTHER,
    ELEVENLABS_FORMAT_PCM,
    ELEVENLABS_KEY_HEADER,
    ELEVENLABS_MODEL_ID,
    ELEVENLABS_URL,
    TRANSCRIPTION_TIMEOUT,
)
from src.transcription import remote
from src.transcription.client import TranscriptionClient
from src.transcription.errors import ResponseDecodeFailed
from src.transcription.types import AudioFormat, TranscriptionOptions, TranscriptionResult

logger = logging.getLogger(__name__)


def _form_fields(opts: TranscriptionOptions) -> tuple[dict[str, str], str]:
    """Multipart text fields and the synthesized upload filename."""
    match AudioFormat(opts.metadata.format):
        case AudioFormat.PCM_S16LE_16:
            file_format, filename = ELEVENLABS_FORMAT_PCM, ELEVENLABS_FILENAME_PCM
        case _:
            file_format, filename = ELEVENLABS_FORMAT_OTHER, ELEVENLABS_FILENAME_WAV
    fields = {"model_id": ELEVENLABS_MODEL_ID, "file_format": file_format}
    if not opts.detect_language:
        fields["language_code"] = opts.language_code
    return fields, filename


class ElevenLabsTranscriptionClient(TranscriptionClient):
    name = "elevenlabs"

    def __init__(
        self,
        api_key: str,
        timeout: float = TRANSCRIPTION_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client

    async def transcribe(
        self, audio: bytes, opts: TranscriptionOptions
    ) -> TranscriptionResult:
        remote.check_request(self.name, audio, opts)
        fields, filename = _form_fields(opts)
        logger.debug("ElevenLabs upload %s (%d bytes)", filename, len(audio))
        body = await remote.post(
            self.name,
            ELEVENLABS_URL,
            timeout=self._timeout,
            http_client=self._http_client,
            headers={ELEVENLABS_KEY_HEADER: self._api_key},
            data=fields,
            files={"file": (filename, audio, "application/octet-stream")},
        )
        return self._parse(body)

    def _parse(self, body: object) -> TranscriptionResult:
        match body:
            case {"text": str() as text, **rest}:
                language = rest.get("language_code") or ""
                match language:
                    case str():
                        return TranscriptionResult(text=text, language_code=language)
                    case _:
                        pass
            case _:
                pass
        raise ResponseDecodeFailed(self.name, "response did not match the expected schema")
