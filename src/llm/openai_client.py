"""OpenAI Chat Completion API wrapper."""

from __future__ import annotations

from collections.abc import Iterable

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI

from agents.errors import UpstreamRejectedError, UpstreamUnavailableError
from config.settings import Settings
from llm.base import BaseLLMClient


def _has_error_payload(response: httpx.Response) -> bool:
    try:
        data = response.json()
    except ValueError:
        return False
    return isinstance(data, dict) and bool(data.get("error"))


class OpenAIClient(BaseLLMClient):
    """Wrapper for the OpenAI (or Azure OpenAI) Chat Completion API.

    SDK retries are disabled; every call is a single attempt.
    """

    def __init__(self, settings: Settings, *, http_client: httpx.AsyncClient | None = None) -> None:
        if not settings.openai_api_key:
            raise ValueError("LLM API key must be configured for OpenAI client.")

        self._client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.llm_base_url or None,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
            http_client=http_client,
        )
        self._model = settings.llm_model

    async def chat(
        self,
        messages: Iterable[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=list(messages),
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as exc:
            if _has_error_payload(exc.response):
                raise UpstreamRejectedError(f"HTTP {exc.status_code}: {exc.message}") from exc
            raise UpstreamUnavailableError(
                f"HTTP {exc.status_code} without an error payload"
            ) from exc
        except APIError as exc:
            # APIConnectionError / APITimeoutError / APIResponseValidationError
            raise UpstreamUnavailableError(str(exc)) from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise UpstreamUnavailableError("LLM response contains no choices.")
        content = choices[0].message.content
        if content is None:
            raise UpstreamUnavailableError("LLM response choice has no content.")
        return content

    async def aclose(self) -> None:
        await self._client.close()
