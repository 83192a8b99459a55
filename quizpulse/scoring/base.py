"""
Base Scoring Strategy.

Provides the abstract base for per-question-type scoring strategies and
a registry that selects a strategy from a question's type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from loguru import logger

from ..models import Answer, Question, QuestionType


# =============================================================================
# Strategy Registry
# =============================================================================


class StrategyRegistry:
    """
    Registry for scoring strategies.

    Example:
        # Register a strategy
        @StrategyRegistry.register(QuestionType.SINGLE)
        class SingleChoiceStrategy(ScoringStrategy):
            ...

        # Auto-select from a question
        strategy = StrategyRegistry.for_question(question)
    """

    _strategies: ClassVar[dict[QuestionType, ScoringStrategy]] = {}

    @classmethod
    def register(cls, question_type: QuestionType):
        """
        Decorator to register a scoring strategy.

        Strategies are stateless, so one shared instance is kept per type.

        Args:
            question_type: QuestionType this strategy handles
        """

        def decorator(strategy_class: type[ScoringStrategy]):
            strategy_class.question_type = question_type
            cls._strategies[question_type] = strategy_class()
            logger.debug(f"Registered strategy: {question_type.value} -> {strategy_class.__name__}")
            return strategy_class

        return decorator

    @classmethod
    def get(cls, question_type: QuestionType) -> ScoringStrategy:
        """Get strategy by question type."""
        if question_type not in cls._strategies:
            raise KeyError(f"No strategy registered for question type: {question_type.value}")
        return cls._strategies[question_type]

    @classmethod
    def for_question(cls, question: Question) -> ScoringStrategy:
        """Get the strategy that scores a question."""
        return cls.get(question.type)

    @classmethod
    def list_strategies(cls) -> dict[str, ScoringStrategy]:
        """List all registered strategies."""
        return {t.value: s for t, s in cls._strategies.items()}


# =============================================================================
# Base Scoring Strategy
# =============================================================================


class ScoringStrategy(ABC):
    """
    Abstract base class for scoring strategies.

    A strategy knows two things about its question type:
    1. The best score an ideal respondent can reach (max_score)
    2. What a given answer is worth (score)

    Neither method may raise on stale or missing references; anything that
    cannot be resolved is worth 0.
    """

    question_type: ClassVar[QuestionType] = QuestionType.SINGLE
    name: ClassVar[str] = "base_strategy"

    @abstractmethod
    def max_score(self, question: Question) -> int:
        """Maximum achievable score for a question. Never negative."""
        ...

    @abstractmethod
    def score(self, question: Question, answer: Answer | None) -> int:
        """
        Score a respondent's answer.

        Args:
            question: The question being scored
            answer: The respondent's answer, None when unanswered

        Returns:
            Points awarded (may be negative)
        """
        ...

    def _sum_selected(self, question: Question, answer: Answer) -> int:
        """Sum the scores of every selected option, ignoring unknown ids."""
        total = 0
        for option_id in answer.selected_option_ids:
            option = question.option(option_id)
            if option is None:
                logger.debug(f"Ignoring stale option id {option_id!r} on question {question.id!r}")
                continue
            total += option.score
        return total

    @staticmethod
    def _normalize(text: str) -> str:
        """Normalize text for keyword comparison."""
        return text.strip().casefold()
