"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to the Notion credentials, collection identifiers and
output settings.

Usage:
    from utils.config import settings

    token = settings.NOTION_API_KEY
    journal_db = settings.DB_JOURNAL
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

FEED_DATABASES = {
    "habits": "DB_HABITS",
    "journal": "DB_JOURNAL",
    "skincare": "DB_SKINCARE",
    "treatments": "DB_TREATMENTS",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Notion API
    NOTION_API_KEY: str = Field(default="")
    NOTION_TIMEOUT_MS: int = Field(default=60_000)

    # Collection identifiers (unset -> empty feed)
    DB_HABITS: Optional[str] = Field(default=None)
    DB_JOURNAL: Optional[str] = Field(default=None)
    DB_SKINCARE: Optional[str] = Field(default=None)
    DB_TREATMENTS: Optional[str] = Field(default=None)

    # Output
    OUTPUT_PATH: str = Field(default="data/notion-data.json")

    # Fetch limits
    PAGE_SIZE: int = Field(default=100, ge=1, le=100)
    JOURNAL_LIMIT: int = Field(default=20, ge=0)
    TREATMENTS_LIMIT: int = Field(default=50, ge=0)

    # Scheduler Configuration
    RUN_ONCE: bool = Field(default=True)
    SYNC_SCHEDULE_CRON: str = Field(default="*/15 * * * *")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("DB_HABITS", "DB_JOURNAL", "DB_SKINCARE", "DB_TREATMENTS", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only identifiers as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    def database_id(self, feed: str) -> Optional[str]:
        """Return the collection identifier configured for a feed."""
        return getattr(self, FEED_DATABASES[feed])

    def missing_databases(self) -> list[str]:
        """Feeds with no collection identifier configured."""
        return [feed for feed in FEED_DATABASES if self.database_id(feed) is None]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
