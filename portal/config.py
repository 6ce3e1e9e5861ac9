"""Client configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalSettings(BaseSettings):
    """Settings for the assessment portal client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend API
    API_URL: str = "http://localhost:8080"
    REQUEST_TIMEOUT: float = 30.0  # Seconds per request

    # Frontend (for shareable assessment links)
    FRONTEND_URL: str = "http://localhost:3000"

    # Session persistence
    SESSION_FILE: str = "~/.assessment_portal/session.json"

    # Exam timer
    EXAM_TICK_INTERVAL: float = 1.0  # Seconds between countdown ticks
    LOW_TIME_THRESHOLD: int = 300  # Clock shown as low below this many seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # json or console


@lru_cache
def get_settings() -> PortalSettings:
    """Get cached settings instance."""
    return PortalSettings()


settings = get_settings()
