"""
Configuration Management for LocaPay

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The billing core never reads configuration itself; only the session
layer and the storage backends do.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the roster and the audit trail are kept on disk."""

    model_config = SettingsConfigDict(
        env_prefix="LOCAPAY_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    roster_path: Path = Field(
        default=Path("locapay_roster.json"),
        description="JSON file holding the tenant roster"
    )
    audit_path: Path = Field(
        default=Path("locapay_audit.jsonl"),
        description="Append-only JSON lines file for audit events"
    )
    seed_on_missing: bool = Field(
        default=True,
        description="Start from the demo roster when no stored roster exists"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCAPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_label: str = Field(
        default="FCFA",
        min_length=1,
        max_length=10,
        description="Currency label appended to amounts"
    )
    default_photo_ref: str = Field(
        default="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=100&h=100&fit=crop&crop=face",
        description="Avatar used when a new tenant has no photo"
    )

    @field_validator('currency_label')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency labels are displayed upper-case."""
        return v.strip().upper()


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

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
