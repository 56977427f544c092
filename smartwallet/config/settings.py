"""
Configuration Management for SmartWallet

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Scoring weights default to the documented recommendation rules; they are
exposed as settings so deployments can tune them without code changes.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_STORAGE_BACKENDS = ("memory",)


class ScoringSettings(BaseSettings):
    """Weights used by the suggestion engine."""

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        extra="ignore"
    )

    direct_cashback_weight: float = Field(
        default=10.0,
        ge=0,
        description="Multiplier for a cashback rate set on the purchase category"
    )
    fallback_cashback_weight: float = Field(
        default=5.0,
        ge=0,
        description="Multiplier for the fallback 'other' cashback rate"
    )
    perk_bonus: float = Field(
        default=5.0,
        ge=0,
        description="Flat bonus when the card has perks for the category"
    )
    preferred_category_bonus: float = Field(
        default=3.0,
        ge=0,
        description="Flat bonus when the cardholder tagged the card with the category"
    )
    recency_bonus: float = Field(
        default=1.0,
        ge=0,
        description="Flat bonus for a recently used card"
    )
    recency_window_days: int = Field(
        default=7,
        ge=0,
        description="How recent 'recently used' is, in days"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the structured logger"
    )

    # Storage
    storage_backend: str = Field(
        default="memory",
        description="Card storage backend"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('storage_backend')
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        backend = v.strip().lower()
        if backend not in SUPPORTED_STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage backend: {v}. "
                f"Supported: {', '.join(SUPPORTED_STORAGE_BACKENDS)}"
            )
        return backend

    @property
    def effective_log_level(self) -> str:
        """Level handed to configure_logging; debug_mode forces DEBUG."""
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def scoring(self) -> ScoringSettings:
        return ScoringSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<name>_error` entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.scoring
        results["scoring"] = True
    except ValueError as e:
        results["scoring"] = False
        results["scoring_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
