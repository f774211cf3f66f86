# src/localprice/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a .env file) and are validated
on load. Every field has a default, so the service starts with no
configuration at all.

Files that USE this module:
- localprice.app (logging, server bind address, composition)
- localprice.adapters.providers.* (upstream URL and HTTP timeout)
- localprice.application.rates_service (cache duration)
- localprice.adapters.http.api (CORS origin, admin token, public cache lifetime)

Files that this module USES:
- localprice.shared.validators (currency code validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from datetime import timedelta  # Cache duration as a time span
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from localprice.shared.validators import validate_currency_code  # Validate 3-letter currency codes


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    
    # --- Upstream rate source ---
    rates_base_url: str = Field(
        default="https://api.exchangerate-api.com/v4/latest", alias="RATES_BASE_URL"
    )
    
    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    
    # --- Cache Settings (in minutes) ---
    rates_cache_minutes: int = Field(default=60, alias="RATES_CACHE_MINUTES", ge=1, le=1440)
    
    # --- Currency defaults ---
    default_base_currency: str = Field(default="USD", alias="DEFAULT_BASE_CURRENCY")
    
    # --- Public API ---
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")
    admin_token: str = Field(default="", alias="ADMIN_TOKEN")  # empty disables cache clearing over HTTP
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT", ge=1, le=65535)
    
    # --- Logging (for server deployment) ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="LOCALPRICE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    
    @property
    def cache_duration(self) -> timedelta:
        """How long a fetched rate table counts as fresh."""
        return timedelta(minutes=self.rates_cache_minutes)
    
    @property
    def public_cache_max_age(self) -> int:
        """
        Cache-Control max-age (seconds) for the public rate endpoint.
        
        Mirrors the in-process cache window so downstream HTTP caches
        don't hold rates longer than we do.
        """
        return int(self.cache_duration.total_seconds())
    
    @field_validator("default_base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Validate base currency format."""
        v = v.strip().upper()
        if not validate_currency_code(v):
            raise ValueError("DEFAULT_BASE_CURRENCY must be a 3-letter currency code")
        return v
    
    @field_validator("rates_base_url")
    @classmethod
    def validate_rates_url(cls, v: str) -> str:
        """Validate upstream URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("RATES_BASE_URL must be an http(s) URL")
        return v.rstrip("/")


# Global settings instance
settings = Settings()
