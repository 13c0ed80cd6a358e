"""
Ship maintenance: Configuration settings.

Loads from environment variables (and an optional .env file) with sensible defaults.
"""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./shipmaint.db"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Security - leave empty to disable the API key check (single-user desktop mode)
    api_key: Optional[str] = None
    cors_origins: str = ""              # Comma-separated; empty = same-origin only

    # Scheduling windows
    due_soon_days: int = 7              # Tasks due inside this window are "soon"
    expiring_documents_days: int = 30   # Crew document look-ahead

    # First-start seeding
    seed_demo_data: bool = True         # SFI groups, cargo ship hierarchy, sample tasks
    seed_default_users: bool = True     # admin / engineer

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
