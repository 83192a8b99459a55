"""
Aggregation Engine.

Summarizes a quiz's submissions for the analytics view:
- Headline stats (count, average score, max possible score)
- Per-option selection tallies for every SINGLE/MULTI question

TEXT questions have no discrete option set and get no tallies.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from ..models import (
    AnalyticsReport,
    AnalyticsSummary,
    OptionTally,
    Question,
    QuestionTally,
    QuestionType,
    Quiz,
    Submission,
)
from ..scoring import max_score

LABEL_WIDTH = 15


def average_score(submissions: Sequence[Submission]) -> float:
    """Mean total score rounded half-up to one decimal; 0 with no submissions."""
    if not submissions:
        return 0.0
    total = sum(s.total_score for s in submissions)
    mean = Decimal(total) / Decimal(len(submissions))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize(quiz: Quiz, submissions: Sequence[Submission]) -> AnalyticsSummary:
    """Build the headline statistics for a quiz."""
    return AnalyticsSummary(
        count=len(submissions),
        average=average_score(submissions),
        max_possible=max_score(quiz),
    )


def tally_question(question: Question, submissions: Sequence[Submission]) -> QuestionTally:
    """
    Count option selections for one question.

    Tallies follow the question's option order. A MULTI answer increments
    every option it selects; ids that no longer exist are skipped.
    """
    counts = {opt.id: 0 for opt in question.options}
    stale = 0

    for submission in submissions:
        answer = submission.answer_for(question.id)
        if answer is None:
            continue
        for option_id in answer.selected_option_ids:
            if option_id in counts:
                counts[option_id] += 1
            else:
                stale += 1

    if stale:
        logger.debug(f"Skipped {stale} stale selections on question {question.id!r}")

    return QuestionTally(
        question_id=question.id,
        text=question.text,
        type=question.type,
        options=tuple(
            OptionTally(option_id=opt.id, label=opt.text, count=counts[opt.id])
            for opt in question.options
        ),
    )


def aggregate(quiz: Quiz, submissions: Sequence[Submission]) -> AnalyticsReport:
    """
    Aggregate submissions for a quiz.

    Args:
        quiz: A resolved quiz definition
        submissions: Every submission recorded for the quiz

    Returns:
        AnalyticsReport with summary and per-question tallies
    """
    submissions = list(submissions)
    per_question = tuple(
        tally_question(q, submissions)
        for q in quiz.questions
        if q.type is not QuestionType.TEXT
    )
    report = AnalyticsReport(summary=summarize(quiz, submissions), per_question=per_question)
    logger.debug(
        f"Aggregated {report.summary.count} submissions for quiz {quiz.id!r} "
        f"({len(per_question)} charted questions)"
    )
    return report


def truncate_label(text: str, width: int = LABEL_WIDTH) -> str:
    """Shorten an option label for chart axes."""
    if len(text) <= width:
        return text
    return text[:width] + "..."
