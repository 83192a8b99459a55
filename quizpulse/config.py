"""
Configuration settings for QuizPulse.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with ``QUIZPULSE_`` (e.g. ``QUIZPULSE_STORAGE_BACKEND=sql``).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    storage_backend: Literal["memory", "json", "sql", "http"] = Field(
        default="json",
        description="Quiz/submission repository backend",
    )
    json_db_path: str = Field(
        default="database.json",
        description="Document path for the json backend",
    )
    database_url: str = Field(
        default="sqlite:///quizpulse.db",
        description="SQLAlchemy connection string for the sql backend",
    )
    seed_demo_quiz: bool = Field(
        default=True,
        description="Create the demo quiz when a json store is first initialized",
    )

    # ========================================
    # Remote API (http backend)
    # ========================================
    api_base_url: str = Field(
        default="http://127.0.0.1:3000/api",
        description="Base URL of a remote QuizPulse API",
    )
    api_timeout_ms: int = Field(
        default=10000,
        description="Remote API request timeout in milliseconds",
    )

    # ========================================
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=3000,
        description="API server port",
    )
    share_base_url: str = Field(
        default="http://localhost:3000",
        description="Origin used to build respondent share links",
    )

    # ========================================
    # Demo-mode guard (not authentication)
    # ========================================
    admin_pin: str = Field(
        default="1234",
        description="PIN that unlocks admin commands in demo mode",
    )
    demo_guard_enabled: bool = Field(
        default=False,
        description="Require the X-Demo-Pin header on API write routes",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
