import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizroom.core.config import settings
from quizroom.core.errors import Conflict
from quizroom.models.quiz_db.participant_db import Participant
from quizroom.models.quiz_db.question_db import Question
from quizroom.models.quiz_db.quiz_db import Quiz
from quizroom.models.quiz_db.submission_db import Submission
from quizroom.schemas.quiz.quiz_base import QuizCreate, QuizUpdate
from quizroom.schemas.quiz.question_base import QuestionCreate
from quizroom.services.codes import generate_code

logger = logging.getLogger(__name__)


def get_quiz_by_code(db: Session, code: str) -> Optional[Quiz]:
    return db.query(Quiz).filter(Quiz.code == code).first()


def code_exists(db: Session, code: str) -> bool:
    return db.query(Quiz.id).filter(Quiz.code == code).first() is not None


def create_quiz(db: Session, quiz_in: QuizCreate, admin_id: UUID) -> Quiz:
    # check-then-insert; a concurrent insert of the same code fails on the
    # unique constraint and is retried with a new code
    for _ in range(settings.QUIZ_CODE_MAX_ATTEMPTS):
        code = generate_code(settings.QUIZ_CODE_LENGTH)
        if code_exists(db, code):
            logger.info("Quiz code %s already taken, retrying", code)
            continue

        quiz = Quiz(
            code=code,
            title=quiz_in.title,
            admin_name=quiz_in.admin_name,
            admin_id=admin_id,
            deadline=quiz_in.deadline,
        )
        db.add(quiz)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Quiz code %s collided on insert, retrying", code)
            continue
        db.refresh(quiz)
        return quiz

    logger.error("Gave up allocating a quiz code after %d attempts", settings.QUIZ_CODE_MAX_ATTEMPTS)
    raise Conflict("Could not allocate a unique quiz code")


def update_quiz(db: Session, quiz: Quiz, updates: QuizUpdate) -> Quiz:
    if updates.title is not None:
        quiz.title = updates.title
    if updates.deadline is not None:
        quiz.deadline = updates.deadline
    if updates.active is not None:
        quiz.active = updates.active

    db.commit()
    db.refresh(quiz)
    return quiz


def start_quiz(db: Session, quiz: Quiz) -> Quiz:
    quiz.started = True
    db.commit()
    db.refresh(quiz)
    return quiz


def get_quizzes_for_admin(db: Session, admin_id: UUID, skip: int, limit: int) -> Tuple[int, List[Quiz]]:
    query = db.query(Quiz).filter(Quiz.admin_id == admin_id)
    total = query.count()
    quizzes = query.order_by(Quiz.created_at.desc()).offset(skip).limit(limit).all()
    return total, quizzes


def add_question(db: Session, quiz: Quiz, question_in: QuestionCreate) -> Question:
    question = Question(
        quiz_id=quiz.id,
        content=question_in.content,
        type=question_in.type.value,
        choices=question_in.choices,
        answer=question_in.answer,
        points=question_in.points,
        order=question_in.order,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def get_question(db: Session, quiz: Quiz, question_id: UUID) -> Optional[Question]:
    return (
        db.query(Question)
        .filter(Question.id == question_id, Question.quiz_id == quiz.id)
        .first()
    )


def update_question(db: Session, question: Question, question_in: QuestionCreate) -> Question:
    question.content = question_in.content
    question.type = question_in.type.value
    question.choices = question_in.choices
    question.answer = question_in.answer
    question.points = question_in.points
    question.order = question_in.order

    db.commit()
    db.refresh(question)
    return question


def delete_question(db: Session, question: Question) -> None:
    db.delete(question)
    db.commit()


def quiz_has_submissions(db: Session, quiz: Quiz) -> bool:
    return db.query(Submission.id).filter(Submission.quiz_id == quiz.id).first() is not None


def create_participant(db: Session, quiz: Quiz, username: str, user_id: Optional[UUID] = None) -> Participant:
    participant = Participant(quiz_id=quiz.id, username=username, user_id=user_id)
    db.add(participant)
    db.commit()
    db.refresh(participant)
    return participant


def get_participant(db: Session, quiz: Quiz, participant_id: UUID) -> Optional[Participant]:
    return (
        db.query(Participant)
        .filter(Participant.id == participant_id, Participant.quiz_id == quiz.id)
        .first()
    )


def get_participants_by_name(db: Session, quiz: Quiz, username: str) -> List[Participant]:
    return (
        db.query(Participant)
        .filter(Participant.quiz_id == quiz.id, Participant.username == username)
        .all()
    )
