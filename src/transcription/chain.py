"""ProviderChain — ordered fallback across transcription backends."""
import asyncio
import logging
import time
from collections.abc import Iterable
from typing import Optional

from src.constants import MSG_PROVIDER_FAILED
from src.transcription.client import TranscriptionClient
from src.transcription.errors import (
    AllProvidersFailed,
    NetworkFailure,
    NoProvidersConfigured,
    ProviderError,
)
from src.transcription.types import TranscriptionOptions, TranscriptionResult

logger = logging.getLogger(__name__)


class ProviderChain(TranscriptionClient):
    """Tries each provider in construction order; the first success wins.

    The provider tuple is fixed at construction and nothing else is stored,
    so one chain can serve concurrent requests. ``deadline`` bounds the whole
    run in seconds; without it only each provider's own timeout applies.
    """

    name = "chain"

    def __init__(
        self,
        providers: Iterable[TranscriptionClient],
        deadline: Optional[float] = None,
    ) -> None:
        self._providers = tuple(providers)
        self._deadline = deadline

    @property
    def providers(self) -> tuple[TranscriptionClient, ...]:
        return self._providers

    async def transcribe(
        self, audio: bytes, opts: TranscriptionOptions
    ) -> TranscriptionResult:
        match self._providers:
            case ():
                raise NoProvidersConfigured()
            case _:
                pass

        started = time.monotonic()
        attempts: list[tuple[int, ProviderError]] = []
        for ordinal, provider in enumerate(self._providers, start=1):
            remaining = self._remaining(started)
            match remaining:
                case float() as r if r <= 0:
                    attempts.append(
                        (ordinal, NetworkFailure(provider.name, "chain deadline exhausted"))
                    )
                    break
                case _:
                    pass
            try:
                return await self._attempt(provider, audio, opts, remaining)
            except ProviderError as exc:
                logger.warning(MSG_PROVIDER_FAILED, ordinal, provider.name, exc)
                attempts.append((ordinal, exc))

        raise AllProvidersFailed(attempts)

    def _remaining(self, started: float) -> Optional[float]:
        match self._deadline:
            case None:
                return None
            case deadline:
                return float(deadline) - (time.monotonic() - started)

    @staticmethod
    async def _attempt(
        provider: TranscriptionClient,
        audio: bytes,
        opts: TranscriptionOptions,
        remaining: Optional[float],
    ) -> TranscriptionResult:
        match remaining:
            case None:
                return await provider.transcribe(audio, opts)
            case budget:
                try:
                    return await asyncio.wait_for(provider.transcribe(audio, opts), timeout=budget)
                except asyncio.TimeoutError as exc:
                    raise NetworkFailure(
                        provider.name, f"chain deadline exceeded after {budget:.1f}s"
                    ) from exc
