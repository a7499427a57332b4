from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.core.errors import Conflict, NotFound, ValidationError
from quizroom.core.security import get_current_user
from quizroom.models.quiz_db.quiz_crud import (
    add_question, get_question, update_question, delete_question, quiz_has_submissions
)
from quizroom.models.user_db.user_db import User
from quizroom.routes.quiz.quiz_routers import get_owned_quiz
from quizroom.schemas.quiz.question_base import QuestionCreate, QuestionOut, QuestionUpdate

question_router = APIRouter(prefix="/api/quizzes/{code}/questions", tags=["Questions"])


def get_editable_question(db: Session, code: str, qid: UUID, user: User):
    quiz = get_owned_quiz(db, code, user)
    question = get_question(db, quiz, qid)
    if not question:
        raise NotFound("Question not found")
    # stored scores are never re-graded
    if quiz_has_submissions(db, quiz):
        raise Conflict("Questions cannot change once answers have been submitted")
    return question


@question_router.post("", response_model=QuestionOut)
def add_question_route(
    code: str,
    question_in: QuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    quiz = get_owned_quiz(db, code, current_user)
    return add_question(db, quiz, question_in)


@question_router.patch("/{qid}", response_model=QuestionOut)
def edit_question_route(
    code: str,
    qid: UUID,
    updates: QuestionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    question = get_editable_question(db, code, qid, current_user)

    merged = {
        "content": question.content,
        "type": question.type,
        "choices": question.choices,
        "answer": question.answer,
        "points": question.points,
        "order": question.order,
    }
    merged.update(updates.model_dump(exclude_unset=True))
    try:
        question_in = QuestionCreate(**merged)
    except SchemaValidationError as e:
        raise ValidationError(str(e.errors()[0]["msg"]))

    return update_question(db, question, question_in)


@question_router.delete("/{qid}")
def delete_question_route(
    code: str,
    qid: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    question = get_editable_question(db, code, qid, current_user)
    delete_question(db, question)
    return {"ok": True}
