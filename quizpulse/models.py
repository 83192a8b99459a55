"""
Quiz Data Models.

Value objects shared by the scoring engine, the aggregation engine, the
editor and every storage backend. All of them are frozen dataclasses with
tuple collections so that an engine can never mutate what it is handed.

Serialization uses the camelCase keys of the stored JSON documents
(``createdAt``, ``selectedOptionIds``, ``totalScore`` ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# =============================================================================
# Enums
# =============================================================================


class QuestionType(str, Enum):
    """How a question is answered and scored."""
    SINGLE = "SINGLE"  # Pick one option
    MULTI = "MULTI"    # Pick any number of options
    TEXT = "TEXT"      # Free text matched against a keyword option


# =============================================================================
# Quiz Definition
# =============================================================================


@dataclass(frozen=True)
class Option:
    """
    A single answer option.

    For TEXT questions the option text is the accepted keyword.
    """
    id: str
    text: str = ""
    score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "score": self.score}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Option:
        return cls(
            id=str(data["id"]),
            text=data.get("text") or "",
            score=int(data.get("score") or 0),
        )


@dataclass(frozen=True)
class Question:
    """A quiz question and its scoring rubric."""
    id: str
    text: str = ""
    type: QuestionType = QuestionType.SINGLE
    options: tuple[Option, ...] = ()

    def option(self, option_id: str) -> Option | None:
        """Find an option by id (None for stale references)."""
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "type": self.type.value,
            "options": [opt.to_dict() for opt in self.options],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        return cls(
            id=str(data["id"]),
            text=data.get("text") or "",
            type=QuestionType(data.get("type", QuestionType.SINGLE.value)),
            options=tuple(Option.from_dict(o) for o in data.get("options") or []),
        )


@dataclass(frozen=True)
class Quiz:
    """An authored quiz."""
    id: str
    title: str = ""
    subtitle: str = ""
    created_at: str = ""  # ISO format
    questions: tuple[Question, ...] = ()

    def question(self, question_id: str) -> Question | None:
        """Find a question by id."""
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "createdAt": self.created_at,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Quiz:
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            subtitle=data.get("subtitle") or "",
            created_at=data.get("createdAt") or "",
            questions=tuple(Question.from_dict(q) for q in data.get("questions") or []),
        )


# =============================================================================
# Respondent Data
# =============================================================================


@dataclass(frozen=True)
class Answer:
    """A respondent's answer to one question."""
    question_id: str
    selected_option_ids: tuple[str, ...] = ()  # SINGLE / MULTI
    text_answer: str | None = None  # TEXT

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "questionId": self.question_id,
            "selectedOptionIds": list(self.selected_option_ids),
        }
        if self.text_answer is not None:
            data["textAnswer"] = self.text_answer
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Answer:
        return cls(
            question_id=str(data["questionId"]),
            selected_option_ids=tuple(str(i) for i in data.get("selectedOptionIds") or []),
            text_answer=data.get("textAnswer"),
        )


@dataclass(frozen=True)
class Submission:
    """
    A scored, persisted set of answers.

    Created once at submit time and never modified afterwards.
    """
    id: str
    quiz_id: str
    timestamp: str  # ISO format
    answers: tuple[Answer, ...] = ()
    total_score: int = 0
    max_possible_score: int = 0

    def answer_for(self, question_id: str) -> Answer | None:
        """Get the answer recorded for a question, if any."""
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quizId": self.quiz_id,
            "timestamp": self.timestamp,
            "answers": [a.to_dict() for a in self.answers],
            "totalScore": self.total_score,
            "maxPossibleScore": self.max_possible_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Submission:
        return cls(
            id=str(data["id"]),
            quiz_id=str(data["quizId"]),
            timestamp=data.get("timestamp") or "",
            answers=tuple(Answer.from_dict(a) for a in data.get("answers") or []),
            total_score=int(data.get("totalScore") or 0),
            max_possible_score=int(data.get("maxPossibleScore") or 0),
        )


# =============================================================================
# Engine Results
# =============================================================================


@dataclass(frozen=True)
class ScoreResult:
    """Respondent total and maximum achievable score."""
    total: int
    max: int

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "max": self.max}


@dataclass(frozen=True)
class OptionTally:
    """How many submissions selected one option."""
    option_id: str
    label: str
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"optionId": self.option_id, "label": self.label, "count": self.count}


@dataclass(frozen=True)
class QuestionTally:
    """Option tallies for one question, in authoring order."""
    question_id: str
    text: str
    type: QuestionType
    options: tuple[OptionTally, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "questionId": self.question_id,
            "text": self.text,
            "type": self.type.value,
            "options": [t.to_dict() for t in self.options],
        }


@dataclass(frozen=True)
class AnalyticsSummary:
    """Headline statistics for a quiz."""
    count: int
    average: float
    max_possible: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "average": self.average,
            "maxPossible": self.max_possible,
        }


@dataclass(frozen=True)
class AnalyticsReport:
    """Output of the aggregation engine."""
    summary: AnalyticsSummary
    per_question: tuple[QuestionTally, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "perQuestion": [q.to_dict() for q in self.per_question],
        }
