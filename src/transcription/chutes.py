"""ChutesTranscriptionClient — Chutes whisper-large-v3 backend.

Chutes expects base64 WAV in a JSON body and answers with a list of timed
segments. It never reports the spoken language.
"""
import base64
import logging
from typing import Optional

import httpx

from src.constants import CHUTES_URL, TRANSCRIPTION_TIMEOUT
from src.transcription import remote
from src.transcription.client import TranscriptionClient
from src.transcription.errors import ResponseDecodeFailed
from src.transcription.types import AudioFormat, TranscriptionOptions, TranscriptionResult
from src.transcription.wav import pcm_to_wav

logger = logging.getLogger(__name__)


def build_payload(audio: bytes, opts: TranscriptionOptions) -> dict[str, str]:
    meta = opts.metadata
    match AudioFormat(meta.format):
        case AudioFormat.PCM_S16LE_16:
            audio = pcm_to_wav(audio, meta.sample_rate, meta.channels, meta.bits_per_sample)
        case _:
            pass
    payload = {"audio_b64": base64.standard_b64encode(audio).decode()}
    if not opts.detect_language:
        payload["language"] = opts.language_code
    return payload


class ChutesTranscriptionClient(TranscriptionClient):
    name = "chutes"

    def __init__(
        self,
        api_token: str,
        timeout: float = TRANSCRIPTION_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_token = api_token
        self._timeout = timeout
        self._http_client = http_client

    async def transcribe(
        self, audio: bytes, opts: TranscriptionOptions
    ) -> TranscriptionResult:
        remote.check_request(self.name, audio, opts)
        body = await remote.post(
            self.name,
            CHUTES_URL,
            timeout=self._timeout,
            http_client=self._http_client,
            headers={"Authorization": f"Bearer {self._api_token}"},
            json=build_payload(audio, opts),
        )
        return TranscriptionResult(text=self._join_segments(body).strip(), language_code="")

    def _join_segments(self, body: object) -> str:
        match body:
            case list() as segments if all(
                isinstance(s, dict) and isinstance(s.get("text"), str) for s in segments
            ):
                return "".join(s["text"] for s in segments)
            case _:
                raise ResponseDecodeFailed(
                    self.name, "expected a JSON array of segments with text"
                )
