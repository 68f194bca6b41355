"""Text generation backends used for scenario generation."""

from aiscout.llm.client import (
    LLMAPIError,
    LLMAuthenticationError,
    LLMClientError,
    LLMRateLimitError,
    TextGenerationClient,
    TextGenerator,
    parse_retry_after,
)
from aiscout.llm.config import DEFAULT_MODEL, LLMEndpointConfig, LLMProvider, RetryConfig

__all__ = [
    "DEFAULT_MODEL",
    "LLMAPIError",
    "LLMAuthenticationError",
    "LLMClientError",
    "LLMEndpointConfig",
    "LLMProvider",
    "LLMRateLimitError",
    "RetryConfig",
    "TextGenerationClient",
    "TextGenerator",
    "parse_retry_after",
]
