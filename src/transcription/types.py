"""Value types shared by every transcription backend."""
from dataclasses import dataclass, field
from enum import Enum

from src.constants import (
    DEFAULT_BITS_PER_SAMPLE,
    DEFAULT_CHANNELS,
    DEFAULT_LANGUAGE_CODE,
    DEFAULT_SAMPLE_RATE,
)


class AudioFormat(str, Enum):
    PCM_S16LE_16 = "pcm_s16le_16"
    WAV = "wav"


@dataclass(frozen=True)
class AudioMetadata:
    format: AudioFormat = AudioFormat.PCM_S16LE_16
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE


@dataclass(frozen=True)
class TranscriptionOptions:
    language_code: str = DEFAULT_LANGUAGE_CODE
    metadata: AudioMetadata = field(default_factory=AudioMetadata)

    @property
    def detect_language(self) -> bool:
        """True when the provider should auto-detect ("auto" or blank)."""
        return self.language_code in ("", DEFAULT_LANGUAGE_CODE)


@dataclass(frozen=True)
class TranscriptionResult:
    text: str
    language_code: str = ""
