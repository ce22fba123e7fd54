"""Application-wide configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agents.errors import ConfigurationError
from prompts.loader import load_prompt


class Settings(BaseSettings):
    """Centralized environment configuration.

    Instances are frozen: build one at startup and pass it to the components
    that need it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    log_level: str = Field(default="INFO")

    # Listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Completion service
    openai_api_key: str | None = Field(
        default=None,
        description="Credential for the completion service. Required at startup.",
    )
    llm_provider: Literal["openai", "openai_compatible"] = Field(default="openai")
    llm_base_url: str = Field(default="https://api.openai.com/v1")
    llm_model: str = Field(default="gpt-4")
    llm_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=150, ge=1)
    llm_timeout_seconds: float = Field(default=30.0, gt=0)

    # Call control document
    action_url: str = Field(default="https://app.alodev.org/action-webhook")
    voxray_url: str = Field(
        default="wss://voxray.alodev.org/websocket",
        description="Streaming endpoint the platform connects to. A bare host/path gets wss://.",
    )
    welcome_greeting: str = Field(default="Hi! Ask me anything!")
    status_message: str = Field(default="Twilio VoxRay is running!")

    # Persona
    system_prompt: str = Field(default_factory=lambda: load_prompt("system_prompt.txt"))

    # Session behaviour
    serialize_turns: bool = Field(
        default=False,
        description="If true, replies within one session are written in prompt arrival order.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("openai_api_key")
    @classmethod
    def blank_key_is_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def stream_url(self) -> str:
        """Streaming endpoint as a ws:// or wss:// URL."""

        url = self.voxray_url.strip()
        if url.startswith("https://"):
            return "wss://" + url.removeprefix("https://")
        if url.startswith("http://"):
            return "ws://" + url.removeprefix("http://")
        if url.startswith(("wss://", "ws://")):
            return url
        return "wss://" + url

    def require_credentials(self) -> None:
        if not self.openai_api_key:
            raise ConfigurationError(
                "Missing completion service API key. Set OPENAI_API_KEY in the environment or .env file."
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
