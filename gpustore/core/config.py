# gpustore/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (SQLAlchemy URL, Postgres in production)
      - JWT_SECRET (signing secret shared with the identity provider)

    Optional:
      - ADMIN_EMAILS (JSON list; these accounts are provisioned as admins)
      - STATIC_DIR (root of the static assets, images go to <STATIC_DIR>/images)
    """

    PROJECT_NAME: str = "GPU Store API"
    API_V1_STR: str = "/api/v1"

    # DB config
    DATABASE_URL: str
    DB_ECHO: bool = False

    # JWT verification (backend-side)
    JWT_SECRET: str
    JWT_ALG: str = "HS256"

    # Accounts that get the admin role on first login
    ADMIN_EMAILS: list[str] = []

    # Static assets (uploaded video card images)
    STATIC_DIR: str = "static"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def images_dir(self) -> Path:
        return Path(self.STATIC_DIR) / "images"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
