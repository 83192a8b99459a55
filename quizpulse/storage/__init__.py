"""
Quiz/submission storage.

One QuizRepository interface with pluggable backends:
- memory: in-process dictionaries
- json:   a single JSON document on disk
- sql:    SQLAlchemy tables
- http:   a remote QuizPulse API
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import QuizRepository
from .http import HttpRepository
from .json_file import JsonFileRepository
from .memory import MemoryRepository
from .seed import DEMO_QUIZ_ID, demo_quiz
from .sql import SqlRepository

if TYPE_CHECKING:
    from ..config import Settings


def create_repository(settings: Settings) -> QuizRepository:
    """Build the repository backend selected in settings."""
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryRepository([demo_quiz()] if settings.seed_demo_quiz else None)
    if backend == "json":
        return JsonFileRepository(settings.json_db_path, seed=settings.seed_demo_quiz)
    if backend == "sql":
        return SqlRepository(settings.database_url, echo=settings.log_level == "DEBUG")
    if backend == "http":
        return HttpRepository(settings.api_base_url, timeout_ms=settings.api_timeout_ms)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "DEMO_QUIZ_ID",
    "HttpRepository",
    "JsonFileRepository",
    "MemoryRepository",
    "QuizRepository",
    "SqlRepository",
    "create_repository",
    "demo_quiz",
]
