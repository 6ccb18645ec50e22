"""ChatClient — abstract base for LLM chat relay backends."""
from abc import ABC, abstractmethod


class ChatRelayError(Exception):
    """Raised when the upstream model produced no usable answer."""


class ChatClient(ABC):
    @abstractmethod
    async def complete(self, request: dict) -> dict:
        """Forward a chat-completion request and return the reply message. Raises on failure."""
        ...
