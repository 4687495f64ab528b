"""
config.py — application settings.

Usage:
    from taxregime.config import settings
    print(settings.default_tax_year)

Only the HTTP layer reads settings. The engine receives RegimeConfig objects
explicitly and never consults this module.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Tax year used when a request does not name one ---
    default_tax_year: str = "FY2025-26"

    # --- CORS ---
    # Comma-separated list of allowed frontend origins
    cors_origins: str = "http://localhost:5173,http://localhost:5174"

    # --- Application ---
    debug: bool = False
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton: import this throughout the codebase
settings = Settings()
