from __future__ import annotations

import warnings
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    domain: str = "localhost"
    log_level: str = "INFO"
    data_dir: Path = Path("/app/data")
    db_url: str = "sqlite:////app/data/search.db"

    # Shared secret for admin and collaborator-facing endpoints (X-Admin-Key)
    admin_api_key: str = ""
    allow_open_admin: bool = False

    @model_validator(mode="after")
    def _check_admin_key(self) -> Settings:
        self.admin_api_key = self.admin_api_key.strip()
        if not self.admin_api_key:
            if self.allow_open_admin:
                warnings.warn(
                    "ADMIN_API_KEY is empty but ALLOW_OPEN_ADMIN is set — "
                    "catalog seeding and item events are unauthenticated.",
                    stacklevel=2,
                )
            else:
                raise ValueError(
                    "ADMIN_API_KEY is not set. Without it anyone can seed the "
                    "catalog or fire item-created events. Set ADMIN_API_KEY in "
                    ".env or set ALLOW_OPEN_ADMIN=1 for development."
                )
        return self

    @model_validator(mode="after")
    def _check_ranges(self) -> Settings:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError("SIMILARITY_THRESHOLD must be between 0 and 1")
        if self.catalog_scan_limit < 0:
            raise ValueError("CATALOG_SCAN_LIMIT must be >= 0 (0 scans the full catalog)")
        if self.interest_expiry_days < 1:
            raise ValueError("INTEREST_EXPIRY_DAYS must be >= 1")
        if self.interest_notify_concurrency < 1:
            raise ValueError("INTEREST_NOTIFY_CONCURRENCY must be >= 1")
        return self

    # Fuzzy matching
    similarity_threshold: float = 0.6  # max distance (0 = exact, 1 = unrelated) kept for ranking
    catalog_scan_limit: int = 100      # most popular terms scanned per query; 0 = all

    # Interest requests ("notify me")
    interest_expiry_days: int = 30
    interest_notify_concurrency: int = 4
    interest_expiry_sweep_minutes: int = 60  # 0 disables the background reaper

    # SMTP (for interest notifications)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from: str = ""  # defaults to smtp_user when empty
    smtp_timeout_seconds: float = 15.0
    public_base_url: str = ""  # deep-link prefix, e.g. "https://market.example.com"


@lru_cache
def get_settings() -> Settings:
    return Settings()
