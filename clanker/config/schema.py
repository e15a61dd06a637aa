"""Configuration schema using Pydantic."""

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clanker.providers.litellm_provider import DEFAULT_MODEL

# Variables the Gemini API client reads when no explicit key is set
FALLBACK_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


class Config(BaseSettings):
    """Root configuration for clanker."""

    model_config = SettingsConfigDict(
        env_prefix="CLANKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    model: str = DEFAULT_MODEL
    api_key: str = ""
    api_base: str | None = None
    max_tokens: int = Field(default=8192, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    workspace: str = "."
    tools: list[str] = Field(default_factory=lambda: ["read_file", "write_file"])
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def workspace_path(self) -> Path:
        """Get expanded workspace path."""
        return Path(self.workspace).expanduser().resolve()

    @property
    def resolved_api_key(self) -> str | None:
        """API key, falling back to the Gemini client's own variables."""
        if self.api_key:
            return self.api_key
        for var in FALLBACK_KEY_VARS:
            if os.environ.get(var):
                return os.environ[var]
        return None
