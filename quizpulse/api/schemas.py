"""
Request/response models for the QuizPulse API.

Wire keys are camelCase (``createdAt``, ``selectedOptionIds``...) to stay
compatible with stored documents and existing clients.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import (
    AnalyticsReport,
    Answer,
    Option,
    Question,
    QuestionType,
    Quiz,
    ScoreResult,
    Submission,
)


class WireModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========================================
# Quiz Definition
# ========================================


class OptionSchema(WireModel):
    id: str
    text: str = ""
    score: int = 0

    def to_model(self) -> Option:
        return Option(id=self.id, text=self.text, score=self.score)


class QuestionSchema(WireModel):
    id: str
    text: str = ""
    type: QuestionType = QuestionType.SINGLE
    options: List[OptionSchema] = Field(default_factory=list)

    def to_model(self) -> Question:
        return Question(
            id=self.id,
            text=self.text,
            type=self.type,
            options=tuple(o.to_model() for o in self.options),
        )


class QuizSchema(WireModel):
    id: str
    title: str = ""
    subtitle: str = ""
    created_at: str = ""
    questions: List[QuestionSchema] = Field(default_factory=list)

    def to_model(self) -> Quiz:
        return Quiz(
            id=self.id,
            title=self.title,
            subtitle=self.subtitle,
            created_at=self.created_at,
            questions=tuple(q.to_model() for q in self.questions),
        )

    @classmethod
    def from_model(cls, quiz: Quiz) -> QuizSchema:
        return cls.model_validate(quiz.to_dict())


# ========================================
# Respondent Data
# ========================================


class AnswerSchema(WireModel):
    question_id: str
    selected_option_ids: List[str] = Field(default_factory=list)
    text_answer: Optional[str] = None

    def to_model(self) -> Answer:
        return Answer(
            question_id=self.question_id,
            selected_option_ids=tuple(self.selected_option_ids),
            text_answer=self.text_answer,
        )


class SubmissionSchema(WireModel):
    id: str
    quiz_id: str
    timestamp: str = ""
    answers: List[AnswerSchema] = Field(default_factory=list)
    total_score: int = 0
    max_possible_score: int = 0

    def to_model(self) -> Submission:
        return Submission(
            id=self.id,
            quiz_id=self.quiz_id,
            timestamp=self.timestamp,
            answers=tuple(a.to_model() for a in self.answers),
            total_score=self.total_score,
            max_possible_score=self.max_possible_score,
        )

    @classmethod
    def from_model(cls, submission: Submission) -> SubmissionSchema:
        return cls.model_validate(submission.to_dict())


class AnswersRequest(WireModel):
    """Answers sent for scoring or submission."""

    answers: List[AnswerSchema] = Field(default_factory=list)

    def to_models(self) -> list[Answer]:
        return [a.to_model() for a in self.answers]


# ========================================
# Results
# ========================================


class ScoreResponse(WireModel):
    total: int
    max: int

    @classmethod
    def from_model(cls, result: ScoreResult) -> ScoreResponse:
        return cls(total=result.total, max=result.max)


class OptionTallySchema(WireModel):
    option_id: str
    label: str
    count: int


class QuestionTallySchema(WireModel):
    question_id: str
    text: str
    type: QuestionType
    options: List[OptionTallySchema]


class SummarySchema(WireModel):
    count: int
    average: float
    max_possible: int


class AnalyticsResponse(WireModel):
    summary: SummarySchema
    per_question: List[QuestionTallySchema]

    @classmethod
    def from_model(cls, report: AnalyticsReport) -> AnalyticsResponse:
        return cls.model_validate(report.to_dict())


class SuccessResponse(BaseModel):
    success: bool = True
