"""Factory returning configured LLM client implementation."""

from __future__ import annotations

from config.settings import Settings
from llm.base import BaseLLMClient
from llm.compatible_client import ChatCompletionsHTTPClient
from llm.openai_client import OpenAIClient


def build_llm_client(settings: Settings) -> BaseLLMClient:
    """Instantiate the configured LLM connector."""

    if settings.llm_provider == "openai":
        return OpenAIClient(settings)
    if settings.llm_provider == "openai_compatible":
        return ChatCompletionsHTTPClient(settings)
    raise ValueError(f"Unsupported llm_provider: {settings.llm_provider}")
