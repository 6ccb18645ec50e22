"""Typed failures raised by transcription backends and the provider chain."""


class TranscriptionError(Exception):
    """Root of every transcription failure."""


class ProviderError(TranscriptionError):
    """A single backend could not produce a result."""

    kind = "provider_error"

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class RequestConstructionFailed(ProviderError):
    kind = "request_construction_failed"


class NetworkFailure(ProviderError):
    kind = "network_failure"


class NonOKStatus(ProviderError):
    kind = "non_ok_status"

    def __init__(self, provider: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(provider, f"API error (status {status_code}): {body}")


class ResponseDecodeFailed(ProviderError):
    kind = "response_decode_failed"


class ChainError(TranscriptionError):
    """The provider chain as a whole failed."""


class NoProvidersConfigured(ChainError):

    def __init__(self) -> None:
        super().__init__("no transcription providers configured")


class AllProvidersFailed(ChainError):
    """Every provider failed; ``attempts`` keeps each (ordinal, error) in order."""

    def __init__(self, attempts: list[tuple[int, ProviderError]]) -> None:
        self.attempts = tuple(attempts)
        ordinal, last = self.attempts[-1]
        self.last = last
        self.last_ordinal = ordinal
        super().__init__(
            f"all providers failed, last error: provider {ordinal} failed: {last}"
        )
