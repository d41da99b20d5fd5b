# app/config.py
"""
Application settings.

Loaded once from environment variables and an optional .env file, e.g.:

    API_KEY=change-me PORT=8085 uvicorn app.main:app
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "api-products"
    VERSION: str = "0.1.0"

    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, ge=1, le=65535)

    # Shared secret expected in the X-API-Key header for everything under API_PREFIX
    API_KEY: str = Field(default="your-secret-api-key", min_length=1)
    API_PREFIX: str = "/api"

    CORS_ORIGINS: str = "*"

    MAX_PAGE_SIZE: int = Field(default=100, ge=1)
    SEED_DATA: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
