"""
Text generation endpoint configuration.

Provides Pydantic-validated configuration for the Hugging Face inference
API and OpenAI-compatible chat completion endpoints.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

DEFAULT_MODEL = "mistralai/Mistral-7B-Instruct-v0.2"


class LLMProvider(StrEnum):
    """Supported text generation backends."""

    HUGGINGFACE = "huggingface"
    OPENAI = "openai"  # Any OpenAI-compatible chat completions endpoint


DEFAULT_BASE_URLS: dict[LLMProvider, str] = {
    LLMProvider.HUGGINGFACE: "https://api-inference.huggingface.co",
    LLMProvider.OPENAI: "https://api.openai.com/v1",
}


class RetryConfig(BaseModel):
    """Configuration for retry behavior on generation calls."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0, le=10)
    initial_delay_ms: int = Field(default=1000, ge=0, le=30000)
    max_delay_ms: int = Field(default=30000, ge=0, le=120000)
    exponential_base: float = Field(default=2.0, ge=1.0, le=4.0)
    jitter: bool = True


class LLMEndpointConfig(BaseModel):
    """Configuration for one text generation endpoint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: LLMProvider = Field(
        default=LLMProvider.HUGGINGFACE,
        description="Backend type",
    )
    base_url: str = Field(
        default="",
        description="API base URL; provider default when empty",
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for authentication",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        description="Model identifier",
    )

    # Sampling parameters
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, ge=1, le=128000)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    timeout_ms: int = Field(default=60000, ge=1000, le=300000)

    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url is valid and strip trailing slashes."""
        v = v.strip().rstrip("/")
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @model_validator(mode="before")
    @classmethod
    def apply_provider_default_url(cls, data: Any) -> Any:
        """Fill in the provider's public endpoint when no base_url was given."""
        if isinstance(data, dict) and not data.get("base_url"):
            provider = LLMProvider(data.get("provider") or LLMProvider.HUGGINGFACE)
            data = {**data, "base_url": DEFAULT_BASE_URLS[provider]}
        return data

    @property
    def has_api_key(self) -> bool:
        """Check if API key is configured."""
        return bool(self.api_key.get_secret_value())
