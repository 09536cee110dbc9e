"""
DeskMap - Application Configuration
"""
from functools import lru_cache
from typing import List, Set

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "DeskMap"
    debug: bool = False

    # Database
    # SQLite for development, PostgreSQL for production
    database_url: str = "sqlite+aiosqlite:///./storage/deskmap.db"

    # Uploaded floor plans and employee pictures
    upload_dir: str = "./storage/uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_size: int = 5 * 1024 * 1024  # 5MB
    allowed_image_extensions: Set[str] = {".jpg", ".jpeg", ".png"}

    # Bearer token verification
    jwt_secret_key: str = "deskmap-dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 7 * 24 * 60

    # Local development only: every request acts as an admin
    disable_auth: bool = False

    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
