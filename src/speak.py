"""SpeakHandler — upload → transcription payload, transport-agnostic.

The outer HTTP layer hands over the raw upload and the two optional form
fields; it gets back a JSON-ready dict (or a stream of progress events) and
decides on its own how to put that on the wire.
"""
import asyncio
import base64
import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Optional

from src.constants import (
    DEFAULT_FILE_FORMAT,
    DEFAULT_LANGUAGE_CODE,
    MSG_BACKGROUND_DONE,
    MSG_BACKGROUND_FAIL,
    MSG_BACKGROUND_START,
    MSG_ERR_EMPTY_AUDIO,
    MSG_ERR_INVALID_FORMAT,
    MSG_ERR_TRANSCRIBE,
    MSG_SPEAK_START,
    MSG_TRANSCRIBE_FAIL,
    MSG_TRANSCRIBE_OK,
    MSG_TRANSCRIBING,
)
from src.record_store import SilenceRecordStore
from src.transcription.client import TranscriptionClient
from src.transcription.errors import TranscriptionError
from src.transcription.types import AudioFormat, AudioMetadata, TranscriptionOptions
from src.transcription.wav import audio_length_seconds, pcm_to_wav

logger = logging.getLogger(__name__)

Compressor = Callable[[bytes], Awaitable[bytes]]


# ── payload helpers ───────────────────────────────────────────────────────────


def error_payload(message: str) -> dict:
    return {"error": message, "timestamp": int(time.time())}


def error_status(payload: dict) -> int:
    """HTTP status the outer layer should answer with for ``payload``."""
    return 400 if "error" in payload else 200


def parse_options(
    file_format: Optional[str], language_code: Optional[str]
) -> TranscriptionOptions:
    """Form fields → options, applying the upload defaults. Raises ValueError."""
    fmt = file_format or DEFAULT_FILE_FORMAT
    try:
        audio_format = AudioFormat(fmt)
    except ValueError:
        raise ValueError(MSG_ERR_INVALID_FORMAT % fmt) from None
    return TranscriptionOptions(
        language_code=language_code or DEFAULT_LANGUAGE_CODE,
        metadata=AudioMetadata(format=audio_format),
    )


# ── handler ───────────────────────────────────────────────────────────────────


class SpeakHandler:

    def __init__(
        self,
        transcriber: TranscriptionClient,
        store: Optional[SilenceRecordStore] = None,
        compressor: Optional[Compressor] = None,
    ) -> None:
        self._transcriber = transcriber
        self._store = store
        self._compressor = compressor
        self._background: set[asyncio.Task] = set()

    async def handle(
        self,
        audio: bytes,
        file_format: Optional[str] = None,
        language_code: Optional[str] = None,
    ) -> dict:
        payload: dict = {}
        async for event in self.stream_handle(audio, file_format, language_code):
            payload = event
        payload = dict(payload)
        payload.pop("event", None)
        return payload

    async def stream_handle(
        self,
        audio: bytes,
        file_format: Optional[str] = None,
        language_code: Optional[str] = None,
    ) -> AsyncGenerator[dict, None]:
        """Yields progress events; the last one carries the final payload."""
        logger.info(MSG_SPEAK_START)
        try:
            opts = parse_options(file_format, language_code)
        except ValueError as exc:
            yield {"event": "error", **error_payload(str(exc))}
            return

        match audio:
            case b"" | None:
                logger.error(MSG_ERR_EMPTY_AUDIO)
                yield {"event": "error", **error_payload(MSG_ERR_EMPTY_AUDIO)}
                return
            case _:
                pass

        yield {"event": "received", "bytes": len(audio)}

        logger.info(MSG_TRANSCRIBING, opts.language_code, opts.metadata.format.value)
        yield {"event": "transcribing"}
        start = time.monotonic()
        try:
            result = await self._transcriber.transcribe(audio, opts)
        except TranscriptionError as exc:
            logger.error(MSG_TRANSCRIBE_FAIL, time.monotonic() - start, exc)
            yield {"event": "error", **error_payload(MSG_ERR_TRANSCRIBE % exc)}
            return
        logger.info(MSG_TRANSCRIBE_OK, len(audio), time.monotonic() - start)

        self._schedule_save(audio, opts, result.text)
        meta = opts.metadata
        yield {
            "event": "done",
            "text": result.text,
            "language_code": result.language_code,
            "audio_length": audio_length_seconds(
                len(audio), meta.sample_rate, meta.channels, meta.bits_per_sample
            ),
            "timestamp": int(time.time()),
        }

    async def drain(self) -> None:
        """Wait for pending background saves (shutdown and tests)."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    # ── background persistence ────────────────────────────────────────────────

    def _schedule_save(self, audio: bytes, opts: TranscriptionOptions, text: str) -> None:
        match (self._store, self._compressor):
            case (None, _) | (_, None):
                return
            case _:
                pass
        task = asyncio.create_task(self._save(audio, opts, text))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _save(self, audio: bytes, opts: TranscriptionOptions, text: str) -> None:
        meta = opts.metadata
        wav = (
            pcm_to_wav(audio, meta.sample_rate, meta.channels, meta.bits_per_sample)
            if meta.format == AudioFormat.PCM_S16LE_16
            else audio
        )
        try:
            logger.info(MSG_BACKGROUND_START, len(wav))
            compressed = await self._compressor(wav)
            record = self._store.create(
                audio=base64.standard_b64encode(compressed).decode(),
                result=text,
            )
            logger.info(MSG_BACKGROUND_DONE, record.id)
        except Exception:
            logger.exception(MSG_BACKGROUND_FAIL)
