"""TranscriptionClient — abstract base for speech-to-text backends."""
from abc import ABC, abstractmethod

from src.transcription.types import TranscriptionOptions, TranscriptionResult


class TranscriptionClient(ABC):
    name: str = "transcriber"

    @abstractmethod
    async def transcribe(
        self, audio: bytes, opts: TranscriptionOptions
    ) -> TranscriptionResult:
        """Convert audio bytes to text. Raises TranscriptionError on failure."""
        ...
