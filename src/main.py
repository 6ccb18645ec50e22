"""Entry point — wires Config → provider chain → SpeakHandler.

Also a small harness: ``python -m src.main recording.wav`` transcribes a
local file through the configured chain and prints the speak payload.
"""
import argparse
import asyncio
import functools
import json
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from src.chat.client import ChatClient
from src.chat.openrouter import OpenRouterChatClient
from src.compression import compress_audio
from src.config import Config
from src.constants import KNOWN_PROVIDERS, MSG_RELAY_STARTING
from src.record_store import SilenceRecordStore
from src.speak import SpeakHandler
from src.transcription.chain import ProviderChain
from src.transcription.chutes import ChutesTranscriptionClient
from src.transcription.client import TranscriptionClient
from src.transcription.elevenlabs import ElevenLabsTranscriptionClient
from src.transcription.types import AudioFormat
from src.transcription.wav import strip_wav_header

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    # stdout carries the JSON payload
    root.addHandler(RichHandler(rich_tracebacks=True, console=Console(stderr=True)))


def _make_provider(config: Config, name: str) -> Optional[TranscriptionClient]:
    match (name, config.elevenlabs_api_key, config.chutes_api_token):
        case ("elevenlabs", str() as key, _):
            return ElevenLabsTranscriptionClient(key, timeout=config.transcription_timeout)
        case ("chutes", _, str() as token):
            return ChutesTranscriptionClient(token, timeout=config.transcription_timeout)
        case _:
            logger.warning("Provider %s has no credentials, skipping", name)
            return None


def build_transcriber(config: Config, only: Optional[str] = None) -> ProviderChain:
    """Chain of every configured provider in order, or just ``only``."""
    names = (only,) if only else config.provider_order
    providers = [p for p in (_make_provider(config, n) for n in names) if p is not None]
    logger.info("Transcription chain: %s", " → ".join(p.name for p in providers) or "(empty)")
    return ProviderChain(providers, deadline=config.transcription_deadline)


def build_speak_handler(config: Config, transcriber: TranscriptionClient) -> SpeakHandler:
    compressor = functools.partial(
        compress_audio, fmt=config.compression_format, ffmpeg_path=config.ffmpeg_path
    )
    return SpeakHandler(
        transcriber,
        store=SilenceRecordStore(Path(config.store_path)),
        compressor=compressor,
    )


def build_chat_client(config: Config) -> Optional[ChatClient]:
    match config.openrouter_api_key:
        case str() as key if key:
            return OpenRouterChatClient(key)
        case _:
            return None


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Transcribe an audio file through the relay")
    parser.add_argument("file", type=Path, help="WAV file to transcribe")
    parser.add_argument("--provider", choices=KNOWN_PROVIDERS, default=None,
                        help="use a single provider instead of the configured chain")
    parser.add_argument("--language", default="auto", help="ISO-639 code or 'auto'")
    parser.add_argument("--format", dest="file_format", default=AudioFormat.PCM_S16LE_16.value,
                        choices=[f.value for f in AudioFormat],
                        help="send as raw PCM (header stripped) or as WAV")
    parser.add_argument("--no-store", action="store_true", help="skip compression and storage")
    return parser.parse_args(argv)


async def _run(config: Config, args: argparse.Namespace) -> dict:
    data = args.file.read_bytes()
    match args.file_format:
        case AudioFormat.PCM_S16LE_16.value:
            audio = strip_wav_header(data)
        case _:
            audio = data
    transcriber = build_transcriber(config, only=args.provider)
    handler = (
        SpeakHandler(transcriber)
        if args.no_store
        else build_speak_handler(config, transcriber)
    )
    payload = await handler.handle(audio, args.file_format, args.language)
    await handler.drain()
    return payload


def main(argv: Optional[list[str]] = None) -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)
    logger.info(MSG_RELAY_STARTING)

    args = _parse_args(argv)
    payload = asyncio.run(_run(config, args))
    print(json.dumps(payload, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
