"""API routers."""

from . import quizzes, submissions

__all__ = ["quizzes", "submissions"]
