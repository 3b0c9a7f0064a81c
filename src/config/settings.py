"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

The remote model path is optional: without `GROQ_API_KEY` the service runs heuristic-only.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GROQ_MODEL = "llama-3.1-8b-instant"
DEFAULT_GROQ_API_BASE = "https://api.groq.com/openai/v1"
DEFAULT_INTENT_ENDPOINT_URL = "http://127.0.0.1:8000/api/search-intent"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    groq_api_key: str | None = Field(default=None, alias="GROQ_API_KEY")
    groq_model: str = Field(default=DEFAULT_GROQ_MODEL, alias="GROQ_MODEL")
    groq_api_base: str = Field(default=DEFAULT_GROQ_API_BASE, alias="GROQ_API_BASE")
    groq_timeout_s: float = Field(default=15.0, gt=0, alias="GROQ_TIMEOUT_S")

    intent_endpoint_url: str = Field(default=DEFAULT_INTENT_ENDPOINT_URL, alias="INTENT_ENDPOINT_URL")
    intent_timeout_s: float = Field(default=10.0, gt=0, alias="INTENT_TIMEOUT_S")
    intent_cache_size: int = Field(default=1024, ge=1, alias="INTENT_CACHE_SIZE")

    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, ge=1, le=65535, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("groq_api_key")
    @classmethod
    def blank_key_is_missing(cls, value: str | None) -> str | None:
        """Treat an empty/whitespace `GROQ_API_KEY` as not configured."""

        value = (value or "").strip()
        return value or None

    @field_validator("groq_model")
    @classmethod
    def blank_model_uses_default(cls, value: str) -> str:
        return value.strip() or DEFAULT_GROQ_MODEL

    @property
    def llm_enabled(self) -> bool:
        return self.groq_api_key is not None


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
