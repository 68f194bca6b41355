"""
Application settings for AIScout.

Loads configuration from environment variables with the AISCOUT_ prefix
and an optional YAML file. Values from the file take precedence over the
environment, which takes precedence over defaults.
"""

from __future__ import annotations

import os
from functools import cached_property
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from aiscout.llm.config import DEFAULT_MODEL, LLMEndpointConfig, LLMProvider
from aiscout.scenarios.prompt import Language

logger = structlog.get_logger(__name__)

STANDARD_CONFIG_PATHS = (
    Path(".aiscout.yaml"),
    Path(".aiscout.yml"),
    Path("aiscout.yaml"),
    Path("aiscout.yml"),
)


class AIScoutSettings(BaseSettings):
    """
    Environment-based settings.

    ``HUGGINGFACE_API_KEY`` and ``HUGGINGFACE_MODEL`` are honoured when the
    prefixed variables are not set.
    """

    model_config = SettingsConfigDict(
        env_prefix="AISCOUT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Text generation
    provider: LLMProvider = LLMProvider.HUGGINGFACE
    base_url: str = ""
    api_key: SecretStr = Field(default_factory=lambda: SecretStr(os.getenv("HUGGINGFACE_API_KEY", "")))
    model: str = Field(default_factory=lambda: os.getenv("HUGGINGFACE_MODEL") or DEFAULT_MODEL)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, ge=1)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    request_timeout_ms: int = Field(default=60000, ge=1000, le=300000)

    # Scenario and page analysis defaults
    language: Language = Language.TR
    default_timeout_ms: int = Field(default=30000, ge=5000, le=120000)
    exclude_selectors: list[str] = Field(default_factory=list)
    include_hidden: bool = False
    output_dir: Path = Path("outputs")

    @cached_property
    def endpoint(self) -> LLMEndpointConfig:
        """Build the text generation endpoint configuration."""
        return LLMEndpointConfig(
            provider=self.provider,
            base_url=self.base_url,
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            timeout_ms=self.request_timeout_ms,
        )


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_settings(config_file: Path | str | None = None) -> AIScoutSettings:
    """
    Load settings from an optional YAML file and the environment.

    Priority (highest to lowest):
    1. Config file (explicit path, else the first standard location found)
    2. Environment variables
    3. Defaults

    Raises:
        FileNotFoundError: If an explicit config file does not exist
    """
    file_config: dict[str, Any] = {}
    config_path: Path | None = None
    if config_file:
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        file_config = _read_yaml(config_path)
    else:
        for path in STANDARD_CONFIG_PATHS:
            if path.exists():
                file_config = _read_yaml(path)
                config_path = path
                break

    if file_config:
        logger.debug("Loaded config file", path=str(config_path), keys=sorted(file_config))
    return AIScoutSettings(**file_config)
