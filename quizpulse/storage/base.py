"""
Quiz repository interface.

The single persistence seam of QuizPulse. The engines never touch it; the
service layer fetches a consistent snapshot and hands values to them.
Every backend must give read-your-writes consistency to a single caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Quiz, Submission


class QuizRepository(ABC):
    """Abstract quiz/submission store."""

    name: str = "base"

    @abstractmethod
    def list_quizzes(self) -> list[Quiz]:
        """All quizzes, in creation order."""
        ...

    @abstractmethod
    def fetch_quiz(self, quiz_id: str) -> Quiz | None:
        """Get a quiz, or None when it does not exist."""
        ...

    @abstractmethod
    def upsert_quiz(self, quiz: Quiz) -> None:
        """Insert a quiz or replace the one with the same id."""
        ...

    @abstractmethod
    def delete_quiz(self, quiz_id: str) -> None:
        """Delete a quiz and every submission referencing it."""
        ...

    @abstractmethod
    def fetch_submissions(self, quiz_id: str) -> list[Submission]:
        """Submissions for a quiz, in the order they were appended."""
        ...

    @abstractmethod
    def append_submission(self, submission: Submission) -> None:
        ...

    @abstractmethod
    def delete_submission(self, submission_id: str) -> None:
        ...

    def close(self) -> None:
        """Release backend resources."""
        return None

    def __enter__(self) -> QuizRepository:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
