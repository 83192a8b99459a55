"""Submission router."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ...service import QuizService
from ..dependencies import get_service, require_demo_pin
from ..schemas import SubmissionSchema, SuccessResponse

router = APIRouter()


@router.post("/submissions", response_model=SuccessResponse)
def append_submission(body: SubmissionSchema, service: QuizService = Depends(get_service)):
    """Record a submission scored by the client."""
    service.record_submission(body.to_model())
    return SuccessResponse()


@router.get("/submissions/{quiz_id}", response_model=List[SubmissionSchema])
def list_submissions(quiz_id: str, service: QuizService = Depends(get_service)):
    return [SubmissionSchema.from_model(s) for s in service.submissions(quiz_id)]


@router.delete(
    "/submissions/{submission_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_demo_pin)],
)
def delete_submission(submission_id: str, service: QuizService = Depends(get_service)):
    service.delete_submission(submission_id)
    return SuccessResponse()
