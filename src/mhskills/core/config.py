# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mhskills.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MHSKILLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Cache root for git clones; None means XDG_CACHE_HOME, ~/.cache, then tmp
    cache_dir: Path | None = None

    # Install target root (relative paths resolve against the working directory)
    install_dir: Path = Path(".agents") / "skills"

    # HTTP
    http_timeout: float = 30.0
    user_agent: str = "mh-skills"
    search_api_url: str = "https://skills.sh/api/search"

    # Git
    git_executable: str = "git"

    # Logging
    log_level: str = "WARNING"
    log_format: str = "text"

    @field_validator("http_timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout must be positive")
        return v

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"json", "text"}:
            raise ValueError("log_format must be 'json' or 'text'")
        return v


def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc
