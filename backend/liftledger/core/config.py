"""
Application configuration.
All values loaded from environment variables.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Local calendar
    # IANA zone name used to decide what "today" and a record's local date are.
    # Unset means the system local zone.
    TIMEZONE: Optional[str] = None

    # Insights
    INSIGHT_MIN_SESSIONS: int = 8
    INSIGHT_MIN_DURATION_DAYS: int = 14

    # Caching (outside the pure analytics core)
    SUMMARY_CACHE_TTL_MINUTES: int = 5

    # Leaderboards
    LEADERBOARD_FETCH_LIMIT: int = 1000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
