"""
Application configuration management.

Uses pydantic-settings for type-safe environment variable parsing.
Settings are read once and passed explicitly to whatever needs them
(for example the on-demand converter factory), so no module ever
consults os.getenv() directly.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation and type coercion.

    Values are loaded from environment variables or .env file.
    All fields have sensible defaults for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # On-demand conversion used when a cache is built without an explicit converter
    # Options: "none" (pass-through), "standard" (numeric, text and temporal coercion)
    on_demand_conversion: Literal["none", "standard"] = "none"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def converts_on_demand(self) -> bool:
        """Check if the standard on-demand converters are enabled."""
        return self.on_demand_conversion == "standard"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings singleton.

    The @lru_cache ensures we only parse environment once.
    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
