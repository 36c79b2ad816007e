"""Configuration management for ccbell."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from CCBELL_* environment variables."""

    # Files
    config_path: Path = Path("~/.claude/ccbell.config.json")
    state_path: Path = Path("~/.claude/ccbell.state.json")

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="CCBELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
