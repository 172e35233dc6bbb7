from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    PROJECT_NAME: str = "Room & Project Reservations API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    # Keep the database next to the backend directory so every entry point shares one file
    DATABASE_URL: str = "sqlite:///../reservations.db"

    # Identities are compared exactly as the host supplies them
    ADMIN_EMAILS: List[str] = []
    IDENTITY_HEADER: str = "X-User-Email"

    BOOKING_LOCK_ENABLED: bool = False
    SEED_DEFAULT_ROOMS: bool = True

    # Cache configuration ("redis" or "memory")
    CACHE_BACKEND: str = "redis"
    REDIS_CACHE_URL: str = "redis://localhost:6379/1"
    UNDO_TTL_SECONDS: int = 6 * 60 * 60

    # Celery configuration
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    REMINDER_WINDOW_DAYS: int = 2

    @field_validator("ADMIN_EMAILS", mode="before")
    @classmethod
    def assemble_admin_emails(cls, value: List[str] | str) -> List[str]:
        """Allow both comma-separated strings and list inputs."""
        if isinstance(value, str):
            return [email.strip() for email in value.split(",") if email.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
