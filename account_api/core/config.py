# account_api/core/config.py
from functools import lru_cache

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env):
      - DATABASE_URL (SQLAlchemy URL, SQLite file by default)
      - JWT_SECRET (HS256 signing secret; login fails without it)

    Optional:
      - CORS_ORIGINS (JSON list of allowed frontend origins)
      - STATIC_DIR (directory served at "/" when it exists)
    """

    PROJECT_NAME: str = "Account API"
    API_PREFIX: str = "/api"

    DATABASE_URL: str = "sqlite:///./accounts.db"

    # Token signing (backend-side)
    JWT_SECRET: str | None = None
    JWT_ALG: str = "HS256"
    JWT_EXPIRE_HOURS: int = 24

    # bcrypt cost factor
    BCRYPT_ROUNDS: int = 11

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    STATIC_DIR: str | None = "public"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """
    FastAPI dependency returning the Settings the serving app was built
    with (see `create_app`).
    """
    return request.app.state.settings
