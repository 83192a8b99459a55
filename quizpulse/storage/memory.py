"""In-process repository backend."""

from __future__ import annotations

import threading

from ..models import Quiz, Submission
from .base import QuizRepository


class MemoryRepository(QuizRepository):
    """
    Dictionary-backed store.

    Values are frozen dataclasses, so they are stored and returned as-is.
    Dicts keep insertion order, which gives creation/append ordering.
    """

    name = "memory"

    def __init__(self, quizzes: list[Quiz] | None = None):
        self._lock = threading.Lock()
        self._quizzes: dict[str, Quiz] = {q.id: q for q in quizzes or []}
        self._submissions: dict[str, Submission] = {}

    def list_quizzes(self) -> list[Quiz]:
        with self._lock:
            return list(self._quizzes.values())

    def fetch_quiz(self, quiz_id: str) -> Quiz | None:
        with self._lock:
            return self._quizzes.get(quiz_id)

    def upsert_quiz(self, quiz: Quiz) -> None:
        with self._lock:
            self._quizzes[quiz.id] = quiz

    def delete_quiz(self, quiz_id: str) -> None:
        with self._lock:
            self._quizzes.pop(quiz_id, None)
            self._submissions = {
                sid: s for sid, s in self._submissions.items() if s.quiz_id != quiz_id
            }

    def fetch_submissions(self, quiz_id: str) -> list[Submission]:
        with self._lock:
            return [s for s in self._submissions.values() if s.quiz_id == quiz_id]

    def append_submission(self, submission: Submission) -> None:
        with self._lock:
            self._submissions[submission.id] = submission

    def delete_submission(self, submission_id: str) -> None:
        with self._lock:
            self._submissions.pop(submission_id, None)
