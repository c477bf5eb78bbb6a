"""Application configuration via environment variables."""

import json
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_API_BASE = "http://127.0.0.1:8000"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # HR API: writes and the mutation proxy require API_BASE (no default)
    API_BASE: Optional[str] = None
    PUBLIC_API_BASE: Optional[str] = None
    REQUEST_TIMEOUT_SECONDS: float = 15.0

    # Views
    TIMEZONE: str = ""
    DIRECTORY_PAGE_SIZE: int = 10
    TREND_DAYS: int = 7

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:3000"]'
    PROXY_RATE_LIMIT: str = "120/minute"

    @field_validator("TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        """Reject zone names the tz database does not know, at startup."""
        value = value.strip()
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:3000"]

    @property
    def proxy_base_url(self) -> Optional[str]:
        """Base URL for forwarded writes; ``None`` when unconfigured."""
        return (self.API_BASE or self.PUBLIC_API_BASE or None)

    @property
    def reader_base_url(self) -> str:
        """Base URL for page-load reads, falling back to a local backend."""
        return self.PUBLIC_API_BASE or self.API_BASE or DEFAULT_API_BASE

    @property
    def timezone_name(self) -> Optional[str]:
        return self.TIMEZONE or None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
