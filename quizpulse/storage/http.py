"""
Remote API repository backend.

Talks to a QuizPulse API server (``quizpulse serve``) over HTTP, so a CLI or
another service can share one central store.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from ..exceptions import StorageError
from ..models import Quiz, Submission
from .base import QuizRepository


class HttpRepository(QuizRepository):
    """HTTP client for the QuizPulse REST API."""

    name = "http"

    def __init__(
        self,
        api_url: str,
        timeout_ms: int = 10000,
        transport: httpx.BaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_url: Base URL including the ``/api`` prefix
            timeout_ms: Request timeout in milliseconds
            transport: Optional httpx transport (used by tests)
            headers: Extra headers, e.g. ``X-Demo-Pin``
        """
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.api_url,
            timeout=httpx.Timeout(timeout_ms / 1000.0),
            follow_redirects=True,
            transport=transport,
            headers=headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"Quiz API error: {method} {path} -> {e.response.status_code}")
            raise StorageError(f"{method} {path} failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Quiz API request error: {method} {path}: {e}")
            raise StorageError(f"{method} {path} failed: {e}") from e

    # =========================================================================
    # Quizzes
    # =========================================================================

    def list_quizzes(self) -> list[Quiz]:
        response = self._request("GET", "/quizzes")
        return [Quiz.from_dict(q) for q in response.json()]

    def fetch_quiz(self, quiz_id: str) -> Quiz | None:
        try:
            response = self.client.get(f"/quizzes/{quiz_id}")
        except httpx.RequestError as e:
            logger.error(f"Failed to fetch quiz {quiz_id!r}: {e}")
            raise StorageError(f"GET /quizzes/{quiz_id} failed: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise StorageError(f"GET /quizzes/{quiz_id} failed with status {response.status_code}")
        return Quiz.from_dict(response.json())

    def upsert_quiz(self, quiz: Quiz) -> None:
        self._request("POST", "/quizzes", json=quiz.to_dict())

    def delete_quiz(self, quiz_id: str) -> None:
        self._request("DELETE", f"/quizzes/{quiz_id}")

    # =========================================================================
    # Submissions
    # =========================================================================

    def fetch_submissions(self, quiz_id: str) -> list[Submission]:
        response = self._request("GET", f"/submissions/{quiz_id}")
        return [Submission.from_dict(s) for s in response.json()]

    def append_submission(self, submission: Submission) -> None:
        self._request("POST", "/submissions", json=submission.to_dict())

    def delete_submission(self, submission_id: str) -> None:
        self._request("DELETE", f"/submissions/{submission_id}")
