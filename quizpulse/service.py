"""
Quiz service.

Glue between a QuizRepository and the pure engines: resolves quizzes,
scores and records submissions, and builds analytics reports.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from loguru import logger

from .analytics import aggregate
from .editor import new_id, utc_now_iso, validate_quiz
from .exceptions import QuizNotFoundError
from .models import AnalyticsReport, Answer, Quiz, ScoreResult, Submission
from .scoring import index_answers, score
from .storage import QuizRepository


class QuizService:
    """Operations used by the API and CLI."""

    def __init__(self, repository: QuizRepository, share_base_url: str = "http://localhost:3000"):
        self.repository = repository
        self.share_base_url = share_base_url.rstrip("/")

    # =========================================================================
    # Quizzes
    # =========================================================================

    def list_quizzes(self) -> list[Quiz]:
        return self.repository.list_quizzes()

    def get_quiz(self, quiz_id: str) -> Quiz:
        """Resolve a quiz or raise QuizNotFoundError."""
        quiz = self.repository.fetch_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        return quiz

    def save_quiz(self, quiz: Quiz) -> Quiz:
        """Validate and upsert a quiz."""
        validate_quiz(quiz)
        self.repository.upsert_quiz(quiz)
        logger.info(f"Saved quiz {quiz.id!r} ({len(quiz.questions)} questions)")
        return quiz

    def delete_quiz(self, quiz_id: str) -> None:
        self.repository.delete_quiz(quiz_id)

    def share_url(self, quiz_id: str) -> str:
        """Respondent link for a quiz."""
        return f"{self.share_base_url}/#/quiz/{quiz_id}"

    # =========================================================================
    # Scoring & Submissions
    # =========================================================================

    def preview_score(self, quiz_id: str, answers: Mapping[str, Answer] | Iterable[Answer]) -> ScoreResult:
        """Score answers without recording anything."""
        return score(self.get_quiz(quiz_id), answers)

    def submit(self, quiz_id: str, answers: Mapping[str, Answer] | Iterable[Answer]) -> Submission:
        """
        Score answers and record a submission.

        Args:
            quiz_id: Quiz being answered
            answers: Answers keyed by question id, or a list of Answer

        Returns:
            The stored Submission
        """
        quiz = self.get_quiz(quiz_id)
        by_question = index_answers(answers)
        result = score(quiz, by_question)

        submission = Submission(
            id=new_id("sub"),
            quiz_id=quiz.id,
            timestamp=utc_now_iso(),
            answers=tuple(by_question.values()),
            total_score=result.total,
            max_possible_score=result.max,
        )
        self.repository.append_submission(submission)
        logger.info(f"Recorded submission {submission.id!r} for quiz {quiz.id!r}: {result.total}/{result.max}")
        return submission

    def record_submission(self, submission: Submission) -> Submission:
        """Store a submission scored elsewhere (e.g. by a client)."""
        self.repository.append_submission(submission)
        return submission

    def submissions(self, quiz_id: str) -> list[Submission]:
        return self.repository.fetch_submissions(quiz_id)

    def delete_submission(self, submission_id: str) -> None:
        self.repository.delete_submission(submission_id)

    # =========================================================================
    # Analytics
    # =========================================================================

    def analytics(self, quiz_id: str) -> AnalyticsReport:
        """Aggregate every submission for a quiz."""
        quiz = self.get_quiz(quiz_id)
        return aggregate(quiz, self.repository.fetch_submissions(quiz.id))
