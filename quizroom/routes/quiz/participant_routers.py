from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.core.errors import NotFound, ValidationError
from quizroom.core.security import get_optional_user
from quizroom.models.quiz_db.quiz_crud import get_quiz_by_code, create_participant
from quizroom.models.user_db.user_db import User
from quizroom.schemas.quiz.participant_base import JoinOut, JoinRequest

participant_router = APIRouter(prefix="/api/quizzes", tags=["Participants"])


@participant_router.post("/{code}/join", response_model=JoinOut)
def join_quiz(
    code: str,
    payload: JoinRequest,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user)
):
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")
    if not quiz.active:
        raise ValidationError("Quiz not active")

    username = (payload.username or "").strip()
    if not username:
        username = current_user.name if current_user else "Anonymous"

    participant = create_participant(
        db,
        quiz,
        username=username,
        user_id=current_user.id if current_user else None,
    )
    return {"participant": participant}
