from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from quizroom.core.clock import get_now
from quizroom.core.database import get_db
from quizroom.core.security import get_current_user
from quizroom.models.quiz_db.quiz_crud import get_quizzes_for_admin
from quizroom.models.user_db.user_db import User
from quizroom.schemas.common.page_response import PageResponse
from quizroom.schemas.quiz.quiz_base import QuizSummaryOut
from quizroom.schemas.quiz.submission_base import ReviewOut
from quizroom.services.results import get_last_attempted


user_router = APIRouter(prefix="/api/user", tags=["Users"])


@user_router.get("/quizzes", response_model=PageResponse[QuizSummaryOut])
def list_my_quizzes(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    skip = (page - 1) * size
    total, quizzes = get_quizzes_for_admin(db, current_user.id, skip, size)

    has_next = (page * size) < total
    has_prev = page > 1

    items = [
        QuizSummaryOut(
            id=q.id,
            code=q.code,
            title=q.title,
            admin_name=q.admin_name,
            admin_id=q.admin_id,
            deadline=q.deadline,
            active=q.active,
            started=q.started,
            created_at=q.created_at,
            question_count=len(q.questions),
            participant_count=len(q.participants),
            submission_count=len(q.submissions),
        )
        for q in quizzes
    ]

    return PageResponse[QuizSummaryOut](
        page=page,
        size=size,
        total=total,
        has_next=has_next,
        has_prev=has_prev,
        items=items
    )


@user_router.get("/last-attempted", response_model=ReviewOut)
def last_attempted_quiz(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now)
):
    return get_last_attempted(db, current_user, now)
