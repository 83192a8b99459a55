"""Aggregation engine for quiz analytics."""

from .aggregation import aggregate, average_score, summarize, tally_question, truncate_label

__all__ = [
    "aggregate",
    "average_score",
    "summarize",
    "tally_question",
    "truncate_label",
]
