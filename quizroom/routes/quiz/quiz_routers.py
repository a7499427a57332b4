from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.core.errors import Forbidden, NotFound
from quizroom.core.security import get_current_user
from quizroom.models.quiz_db.quiz_crud import create_quiz, get_quiz_by_code, update_quiz, start_quiz
from quizroom.models.user_db.user_db import User
from quizroom.schemas.quiz.quiz_base import QuizCreate, QuizOut, QuizUpdate, PublicQuizOut
from quizroom.services.deadline_gate import is_owner

quiz_router = APIRouter(prefix="/api/quizzes", tags=["Quiz"])


def get_owned_quiz(db: Session, code: str, user: User):
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")
    if not is_owner(quiz, user):
        raise Forbidden("Not authorized")
    return quiz


@quiz_router.post("", response_model=QuizOut)
def create_quiz_route(
    quiz_in: QuizCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not quiz_in.admin_name:
        quiz_in.admin_name = current_user.name
    return create_quiz(db, quiz_in, admin_id=current_user.id)


@quiz_router.get("/{code}", response_model=PublicQuizOut)
def get_quiz(code: str, db: Session = Depends(get_db)):
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")

    # canonical answers never leave through the public view
    return {
        "id": quiz.id,
        "code": quiz.code,
        "title": quiz.title,
        "admin_name": quiz.admin_name,
        "active": quiz.active,
        "deadline": quiz.deadline,
        "started": quiz.started,
        "participants": [p.username for p in quiz.participants],
        "questions": [
            {
                "id": q.id,
                "order": q.order,
                "content": q.content,
                "type": q.type,
                "choices": q.choices,
                "points": q.points,
            }
            for q in quiz.questions
        ],
    }


@quiz_router.patch("/{code}", response_model=QuizOut)
def update_quiz_route(
    code: str,
    quiz_in: QuizUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    quiz = get_owned_quiz(db, code, current_user)
    return update_quiz(db, quiz, quiz_in)


@quiz_router.post("/{code}/start", response_model=QuizOut)
def start_quiz_route(
    code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    quiz = get_owned_quiz(db, code, current_user)
    return start_quiz(db, quiz)
