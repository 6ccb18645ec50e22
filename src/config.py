from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from src.constants import (
    COMPRESSION_FORMATS,
    DEFAULT_PROVIDER_ORDER,
    FFMPEG_BINARY,
    KNOWN_PROVIDERS,
    SILENCE_STORE_PATH,
    TRANSCRIPTION_TIMEOUT,
)


@dataclass(frozen=True)
class Config:
    elevenlabs_api_key: Optional[str]
    chutes_api_token: Optional[str]
    openrouter_api_key: Optional[str]
    provider_order: tuple[str, ...]
    transcription_timeout: float
    transcription_deadline: Optional[float]
    ffmpeg_path: str
    compression_format: str
    store_path: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        elevenlabs = os.getenv("ELEVENLABS_API_KEY") or None
        chutes = os.getenv("CHUTES_API_TOKEN") or None
        openrouter = os.getenv("OPENROUTER_API_KEY") or None
        raw_order = os.getenv("TRANSCRIPTION_PROVIDERS", DEFAULT_PROVIDER_ORDER)
        timeout = os.getenv("TRANSCRIPTION_TIMEOUT", str(TRANSCRIPTION_TIMEOUT))
        deadline = os.getenv("TRANSCRIPTION_DEADLINE") or None
        ffmpeg_path = os.getenv("FFMPEG_PATH", FFMPEG_BINARY)
        compression_format = os.getenv("COMPRESSION_FORMAT", "ogg").lower()
        store_path = os.getenv("SILENCE_STORE_PATH", SILENCE_STORE_PATH)
        log_level = os.getenv("LOG_LEVEL", "INFO")

        order = tuple(p.strip().lower() for p in raw_order.split(",") if p.strip())

        return cls._validate(
            elevenlabs_api_key=elevenlabs,
            chutes_api_token=chutes,
            openrouter_api_key=openrouter,
            provider_order=order,
            transcription_timeout=float(timeout),
            transcription_deadline=float(deadline) if deadline else None,
            ffmpeg_path=ffmpeg_path,
            compression_format=compression_format,
            store_path=store_path,
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        elevenlabs_api_key: Optional[str],
        chutes_api_token: Optional[str],
        openrouter_api_key: Optional[str],
        provider_order: tuple[str, ...],
        transcription_timeout: float,
        transcription_deadline: Optional[float],
        ffmpeg_path: str,
        compression_format: str,
        store_path: str,
        log_level: str,
    ) -> "Config":
        match (elevenlabs_api_key, chutes_api_token):
            case (None, None):
                raise ValueError("ELEVENLABS_API_KEY or CHUTES_API_TOKEN must be set in .env")
            case _:
                pass

        unknown = [p for p in provider_order if p not in KNOWN_PROVIDERS]
        match unknown:
            case []:
                pass
            case _:
                raise ValueError(f"TRANSCRIPTION_PROVIDERS has unknown entries: {', '.join(unknown)}")

        match compression_format:
            case f if f in COMPRESSION_FORMATS:
                pass
            case _:
                raise ValueError(f"COMPRESSION_FORMAT must be one of {', '.join(COMPRESSION_FORMATS)}")

        return Config(
            elevenlabs_api_key=elevenlabs_api_key,
            chutes_api_token=chutes_api_token,
            openrouter_api_key=openrouter_api_key,
            provider_order=provider_order,
            transcription_timeout=transcription_timeout,
            transcription_deadline=transcription_deadline,
            ffmpeg_path=ffmpeg_path,
            compression_format=compression_format,
            store_path=store_path,
            log_level=log_level,
        )
