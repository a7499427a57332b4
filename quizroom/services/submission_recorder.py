import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from quizroom.core.errors import NotFound, DeadlineExpired
from quizroom.models.quiz_db.quiz_crud import get_quiz_by_code, get_participant
from quizroom.models.quiz_db.submission_crud import create_submission
from quizroom.services.deadline_gate import accepts_submissions
from quizroom.services.grader import grade_answers

logger = logging.getLogger(__name__)


def submit_answers(db: Session, code: str, participant_id: UUID, answers: dict, now: datetime) -> dict:
    """Grade and store one answer sheet.

    Checks run in order and the first failure wins: the quiz must exist,
    the participant must have joined it, and the deadline must not have
    passed. Nothing is written when a check fails.
    """
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")

    participant = get_participant(db, quiz, participant_id)
    if not participant:
        raise NotFound("Participant not found")

    if not accepts_submissions(quiz, now):
        logger.info("Rejected late submission for quiz %s from participant %s", code, participant_id)
        raise DeadlineExpired("Deadline passed")

    total, detail = grade_answers(quiz.questions, answers)

    submission = create_submission(
        db,
        quiz_id=quiz.id,
        participant_id=participant.id,
        answers=answers,
        score=total,
        submitted_at=now,
    )
    logger.info("Recorded submission %s for quiz %s (score %d)", submission.id, code, total)
    return {"submission": submission, "score": total, "detail": detail}
