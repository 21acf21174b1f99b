"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONFLUENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Policy file (named bot policies)
    policy_file: Path = Path(__file__).parent.parent / "policies.yaml"
    default_bot: str = "DEFAULT"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
