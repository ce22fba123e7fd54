"""Shared abstractions for language model clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class BaseLLMClient(ABC):
    """Abstract base class for chat-completion providers.

    Implementations raise ``UpstreamRejectedError`` when the service answers
    with an error payload and ``UpstreamUnavailableError`` for everything else
    that prevents a reply (network, timeout, unreadable body).
    """

    @abstractmethod
    async def chat(
        self,
        messages: Iterable[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the first choice's message content."""

    async def aclose(self) -> None:
        """Release pooled connections."""
