"""
Scoring Engine.

Strategy Pattern implementation for rubric scoring: one pluggable strategy
per question type, selected from a registry.
"""

from .base import ScoringStrategy, StrategyRegistry
from .engine import index_answers, max_score, question_max, question_score, score
from .strategies import MultiChoiceStrategy, SingleChoiceStrategy, TextMatchStrategy

__all__ = [
    # Base classes
    "ScoringStrategy",
    "StrategyRegistry",
    # Strategies
    "SingleChoiceStrategy",
    "MultiChoiceStrategy",
    "TextMatchStrategy",
    # Engine
    "index_answers",
    "max_score",
    "question_max",
    "question_score",
    "score",
]
