"""Client for OpenAI-compatible chat completion endpoints over plain HTTP."""

from __future__ import annotations

from typing import Any, Iterable, List

import httpx

from agents.errors import UpstreamRejectedError, UpstreamUnavailableError
from config.settings import Settings
from llm.base import BaseLLMClient


class ChatCompletionsHTTPClient(BaseLLMClient):
    """Minimal client for any server exposing ``/chat/completions``.

    The response body is checked for an ``error`` member before ``choices``
    are read, whatever the HTTP status.
    """

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        if not settings.llm_base_url:
            raise ValueError("LLM base URL must be configured.")

        self._endpoint = settings.llm_base_url.rstrip("/")
        self._model = settings.llm_model
        self._api_key = settings.openai_api_key
        self._client = httpx.AsyncClient(
            timeout=settings.llm_timeout_seconds,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def chat(
        self,
        messages: Iterable[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        payload = {
            "model": self._model,
            "messages": list(messages),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            response = await self._client.post(
                f"{self._endpoint}/chat/completions",
                json=payload,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"{type(exc).__name__}: {exc}") from exc

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(
                f"HTTP {response.status_code} with a non-JSON body"
            ) from exc

        if isinstance(data, dict) and data.get("error"):
            raise UpstreamRejectedError(str(data["error"]))

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailableError(str(exc)) from exc

        try:
            choices: List[dict] = data["choices"]
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamUnavailableError("LLM response has no readable choices.") from exc
        if not isinstance(content, str):
            raise UpstreamUnavailableError("LLM response choice has no text content.")
        return content

    async def aclose(self) -> None:
        await self._client.aclose()
