"""
QuizPulse: quiz authoring, rubric scoring and response analytics.
"""

from .analytics import aggregate
from .models import (
    AnalyticsReport,
    AnalyticsSummary,
    Answer,
    Option,
    OptionTally,
    Question,
    QuestionTally,
    QuestionType,
    Quiz,
    ScoreResult,
    Submission,
)
from .scoring import max_score, score

__version__ = "1.0.0"

__all__ = [
    "AnalyticsReport",
    "AnalyticsSummary",
    "Answer",
    "Option",
    "OptionTally",
    "Question",
    "QuestionTally",
    "QuestionType",
    "Quiz",
    "ScoreResult",
    "Submission",
    "aggregate",
    "max_score",
    "score",
]
