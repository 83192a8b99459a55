"""
Scoring Engine.

Turns a respondent's raw answers into a total score and the maximum
achievable score for a quiz. Pure functions of their inputs: safe to call
repeatedly (live preview) and from any number of threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from loguru import logger

from ..models import Answer, Question, Quiz, ScoreResult
from .base import StrategyRegistry

# Register built-in strategies
from . import strategies  # noqa: F401

AnswerInput = Mapping[str, Answer] | Iterable[Answer]


def index_answers(answers: AnswerInput | None) -> dict[str, Answer]:
    """
    Key answers by question id.

    Accepts either a mapping (questionId -> Answer) or the list form stored
    on a Submission. With duplicates in a list the last answer wins.
    """
    if answers is None:
        return {}
    if isinstance(answers, Mapping):
        return dict(answers)
    return {answer.question_id: answer for answer in answers}


def question_max(question: Question) -> int:
    """Maximum achievable score for one question."""
    return StrategyRegistry.for_question(question).max_score(question)


def question_score(question: Question, answer: Answer | None) -> int:
    """Score one question's answer (0 when unanswered)."""
    return StrategyRegistry.for_question(question).score(question, answer)


def max_score(quiz: Quiz) -> int:
    """Maximum achievable score for a quiz. Always >= 0."""
    return sum(question_max(q) for q in quiz.questions)


def score(quiz: Quiz, answers: AnswerInput | None) -> ScoreResult:
    """
    Score a set of answers against a quiz rubric.

    Args:
        quiz: The quiz definition
        answers: Answers keyed by question id, or a list of Answer

    Returns:
        ScoreResult with the respondent total and the quiz maximum
    """
    by_question = index_answers(answers)

    total = 0
    maximum = 0
    for question in quiz.questions:
        maximum += question_max(question)
        total += question_score(question, by_question.get(question.id))

    unknown = set(by_question) - {q.id for q in quiz.questions}
    if unknown:
        logger.debug(f"Ignoring answers for unknown questions on quiz {quiz.id!r}: {sorted(unknown)}")

    return ScoreResult(total=total, max=maximum)
