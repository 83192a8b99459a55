"""
JSON document repository backend.

The whole store is one JSON file:

    {"quizzes": [...], "submissions": [...]}

Every call re-reads the document and every write rewrites it, so several
processes pointed at the same file see each other's changes.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

from loguru import logger

from ..exceptions import StorageError
from ..models import Quiz, Submission
from .base import QuizRepository
from .seed import demo_quiz


class JsonFileRepository(QuizRepository):
    """Single-file JSON store."""

    name = "json"

    def __init__(self, path: Path | str, seed: bool = True):
        """
        Initialize the store, creating the file if it does not exist.

        Args:
            path: Location of the JSON document
            seed: Start a new document with the demo quiz
        """
        self.path = Path(path)
        self._lock = threading.RLock()

        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            initial = {
                "quizzes": [demo_quiz().to_dict()] if seed else [],
                "submissions": [],
            }
            self._write(initial)
            logger.info(f"Initialized quiz store at {self.path}")

    # =========================================================================
    # Document I/O
    # =========================================================================

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read quiz store {self.path}: {e}") from e
        data.setdefault("quizzes", [])
        data.setdefault("submissions", [])
        return data

    def _write(self, data: dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write quiz store {self.path}: {e}") from e

    # =========================================================================
    # Quizzes
    # =========================================================================

    def list_quizzes(self) -> list[Quiz]:
        with self._lock:
            return [Quiz.from_dict(q) for q in self._read()["quizzes"]]

    def fetch_quiz(self, quiz_id: str) -> Quiz | None:
        with self._lock:
            for q in self._read()["quizzes"]:
                if q.get("id") == quiz_id:
                    return Quiz.from_dict(q)
        return None

    def upsert_quiz(self, quiz: Quiz) -> None:
        with self._lock:
            data = self._read()
            quizzes = data["quizzes"]
            for i, existing in enumerate(quizzes):
                if existing.get("id") == quiz.id:
                    quizzes[i] = quiz.to_dict()
                    break
            else:
                quizzes.append(quiz.to_dict())
            self._write(data)
        logger.debug(f"Saved quiz {quiz.id!r}")

    def delete_quiz(self, quiz_id: str) -> None:
        with self._lock:
            data = self._read()
            data["quizzes"] = [q for q in data["quizzes"] if q.get("id") != quiz_id]
            data["submissions"] = [s for s in data["submissions"] if s.get("quizId") != quiz_id]
            self._write(data)
        logger.info(f"Deleted quiz {quiz_id!r} and its submissions")

    # =========================================================================
    # Submissions
    # =========================================================================

    def fetch_submissions(self, quiz_id: str) -> list[Submission]:
        with self._lock:
            return [
                Submission.from_dict(s)
                for s in self._read()["submissions"]
                if s.get("quizId") == quiz_id
            ]

    def append_submission(self, submission: Submission) -> None:
        with self._lock:
            data = self._read()
            data["submissions"].append(submission.to_dict())
            self._write(data)
        logger.debug(f"Appended submission {submission.id!r} to quiz {submission.quiz_id!r}")

    def delete_submission(self, submission_id: str) -> None:
        with self._lock:
            data = self._read()
            data["submissions"] = [s for s in data["submissions"] if s.get("id") != submission_id]
            self._write(data)
