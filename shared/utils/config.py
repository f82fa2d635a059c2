"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "PG Bulk Mapping"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

    # Mapping Builder Configuration
    BULK_MAPPING_STRICT: bool = False  # Raise instead of skipping fields without an accessor
    BULK_MAPPING_USE_QUOTING: bool = True  # Quote identifiers in generated COPY statements
    BULK_MAPPING_OVERRIDES_FILE: Optional[str] = None  # YAML file with column -> data type overrides

    @property
    def has_overrides_file(self) -> bool:
        """Whether a global overrides file is configured."""
        return bool(self.BULK_MAPPING_OVERRIDES_FILE)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
