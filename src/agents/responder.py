"""Single-shot reply generation for one caller utterance."""

from __future__ import annotations

import logging

from agents.errors import UpstreamRejectedError, UpstreamUnavailableError
from llm.base import BaseLLMClient

LOGGER = logging.getLogger(__name__)

UNAVAILABLE_REPLY = "Sorry, I am unable to process your request at the moment."
ERROR_REPLY = "Sorry, I encountered an error."


class ResponseGenerator:
    """Turns one utterance into assistant text using the persona prompt.

    ``generate`` never raises: a failed upstream call is replaced by a fixed
    fallback reply so the live call keeps going. No history is sent; every
    call carries only the system prompt and the current utterance.
    """

    def __init__(
        self,
        llm: BaseLLMClient,
        system_prompt: str,
        *,
        temperature: float = 0.8,
        max_tokens: int = 150,
    ) -> None:
        self._llm = llm
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._max_tokens = max_tokens

    def build_messages(self, utterance: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self._system_prompt},
            {"role": "user", "content": utterance},
        ]

    async def generate(self, utterance: str) -> str:
        try:
            reply = await self._llm.chat(
                self.build_messages(utterance),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except UpstreamRejectedError as exc:
            LOGGER.error("Completion service returned an error: %s", exc.detail)
            return UNAVAILABLE_REPLY
        except UpstreamUnavailableError as exc:
            LOGGER.error("Completion request failed: %s", exc.detail)
            return ERROR_REPLY
        except Exception as exc:
            LOGGER.exception("Unexpected failure calling completion service: %s", exc)
            return ERROR_REPLY

        return reply.strip()
