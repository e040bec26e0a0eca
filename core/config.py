"""
Configuration
=============

Settings are read from the environment (and an optional ``.env`` file).
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_API_URL = "http://localhost:3001/api"


class Settings(BaseSettings):
    # Backend
    API_URL: str = DEFAULT_API_URL

    # Logging
    LOG_LEVEL: str = "INFO"

    # Dashboard
    AUTO_REFRESH_MINUTES: int = 5

    @field_validator("API_URL")
    @classmethod
    def normalize_api_url(cls, value: str) -> str:
        # A blank variable behaves like an absent one
        value = (value or "").strip() or DEFAULT_API_URL
        return value.rstrip("/")

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
