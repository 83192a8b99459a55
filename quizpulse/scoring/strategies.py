"""
Scoring Strategy Implementations.

One strategy per QuestionType.
"""

from __future__ import annotations

from ..models import Answer, Question, QuestionType
from .base import ScoringStrategy, StrategyRegistry


# =============================================================================
# SINGLE Strategy
# =============================================================================


@StrategyRegistry.register(QuestionType.SINGLE)
class SingleChoiceStrategy(ScoringStrategy):
    """
    Score single-choice questions.

    The best single option sets the maximum. Every selected option counts
    toward the actual score, so a penalty option can push it below zero.
    """

    name = "single_choice"

    def max_score(self, question: Question) -> int:
        if not question.options:
            return 0
        return max(max(opt.score for opt in question.options), 0)

    def score(self, question: Question, answer: Answer | None) -> int:
        if answer is None:
            return 0
        return self._sum_selected(question, answer)


# =============================================================================
# MULTI Strategy
# =============================================================================


@StrategyRegistry.register(QuestionType.MULTI)
class MultiChoiceStrategy(ScoringStrategy):
    """
    Score multiple-selection questions.

    The maximum is the sum of positive options only: an ideal respondent
    never picks a penalty. The actual score sums every selection, penalties
    included.
    """

    name = "multi_choice"

    def max_score(self, question: Question) -> int:
        return sum(opt.score for opt in question.options if opt.score > 0)

    def score(self, question: Question, answer: Answer | None) -> int:
        if answer is None:
            return 0
        return self._sum_selected(question, answer)


# =============================================================================
# TEXT Strategy
# =============================================================================


@StrategyRegistry.register(QuestionType.TEXT)
class TextMatchStrategy(ScoringStrategy):
    """
    Score free-text questions by keyword match.

    Supports:
    - Whitespace trimming
    - Case-insensitive comparison (casefold)
    - Several accepted keywords (first match wins)

    There is no partial or fuzzy matching.
    """

    name = "text_match"

    def max_score(self, question: Question) -> int:
        if not question.options:
            return 0
        return max(max(opt.score for opt in question.options), 0)

    def score(self, question: Question, answer: Answer | None) -> int:
        if answer is None or not answer.text_answer:
            return 0

        response = self._normalize(answer.text_answer)
        for option in question.options:
            if self._normalize(option.text) == response:
                return option.score
        return 0
