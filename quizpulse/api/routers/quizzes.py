"""
Quiz router.

Endpoints for:
- Quiz CRUD (delete cascades to submissions)
- Live score preview
- Server-side scored submission
- Analytics report
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ...service import QuizService
from ..dependencies import get_service, require_demo_pin
from ..schemas import (
    AnalyticsResponse,
    AnswersRequest,
    QuizSchema,
    ScoreResponse,
    SubmissionSchema,
    SuccessResponse,
)

router = APIRouter()


@router.get("/quizzes", response_model=List[QuizSchema])
def list_quizzes(service: QuizService = Depends(get_service)):
    return [QuizSchema.from_model(q) for q in service.list_quizzes()]


@router.get("/quizzes/{quiz_id}", response_model=QuizSchema)
def get_quiz(quiz_id: str, service: QuizService = Depends(get_service)):
    return QuizSchema.from_model(service.get_quiz(quiz_id))


@router.post("/quizzes", response_model=SuccessResponse, dependencies=[Depends(require_demo_pin)])
def save_quiz(body: QuizSchema, service: QuizService = Depends(get_service)):
    """Insert or replace a quiz."""
    service.save_quiz(body.to_model())
    return SuccessResponse()


@router.delete("/quizzes/{quiz_id}", response_model=SuccessResponse, dependencies=[Depends(require_demo_pin)])
def delete_quiz(quiz_id: str, service: QuizService = Depends(get_service)):
    """Delete a quiz and all of its submissions."""
    service.delete_quiz(quiz_id)
    return SuccessResponse()


@router.post("/quizzes/{quiz_id}/score", response_model=ScoreResponse)
def preview_score(quiz_id: str, body: AnswersRequest, service: QuizService = Depends(get_service)):
    """Score answers without recording a submission."""
    return ScoreResponse.from_model(service.preview_score(quiz_id, body.to_models()))


@router.post("/quizzes/{quiz_id}/submit", response_model=SubmissionSchema)
def submit(quiz_id: str, body: AnswersRequest, service: QuizService = Depends(get_service)):
    """Score answers on the server and record the submission."""
    return SubmissionSchema.from_model(service.submit(quiz_id, body.to_models()))


@router.get("/quizzes/{quiz_id}/analytics", response_model=AnalyticsResponse)
def analytics(quiz_id: str, service: QuizService = Depends(get_service)):
    return AnalyticsResponse.from_model(service.analytics(quiz_id))
