from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quizroom.core.clock import get_now
from quizroom.core.database import get_db
from quizroom.core.security import get_optional_user
from quizroom.models.user_db.user_db import User
from quizroom.schemas.quiz.submission_base import (
    GuestResultsRequest, ResultsOut, ReviewOut, SubmitAnswersIn, SubmitAnswersOut
)
from quizroom.services.results import get_guest_review, get_participant_review, get_results
from quizroom.services.submission_recorder import submit_answers

submission_router = APIRouter(prefix="/api", tags=["Submissions"])


@submission_router.post("/quizzes/{code}/submit", response_model=SubmitAnswersOut)
def submit(
    code: str,
    payload: SubmitAnswersIn,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now)
):
    return submit_answers(db, code, payload.participant_id, payload.answers, now)


@submission_router.get("/quizzes/{code}/result", response_model=ResultsOut)
def results(
    code: str,
    participant_id: Optional[UUID] = Query(None, alias="participantId"),
    participant_name: Optional[str] = Query(None, alias="participantName"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
    now: datetime = Depends(get_now)
):
    return get_results(db, code, current_user, now, participant_id, participant_name)


@submission_router.get("/quizzes/{code}/review/{participant_ref}", response_model=ReviewOut)
def participant_review(
    code: str,
    participant_ref: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
    now: datetime = Depends(get_now)
):
    return get_participant_review(db, code, participant_ref, current_user, now)


@submission_router.post("/guest/quiz-results", response_model=ReviewOut)
def guest_quiz_results(
    payload: GuestResultsRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now)
):
    return get_guest_review(db, payload.code, payload.participant_name, now)
