from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from quizroom.models.quiz_db.participant_db import Participant
from quizroom.models.quiz_db.submission_db import Submission


def create_submission(
    db: Session,
    quiz_id: UUID,
    participant_id: UUID,
    answers: dict,
    score: int,
    submitted_at: datetime,
) -> Submission:
    submission = Submission(
        quiz_id=quiz_id,
        participant_id=participant_id,
        answers=answers,
        score=score,
        submitted_at=submitted_at,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


def latest_submission_for_participant(db: Session, participant_id: UUID) -> Optional[Submission]:
    return (
        db.query(Submission)
        .filter(Submission.participant_id == participant_id)
        .order_by(Submission.submitted_at.desc())
        .first()
    )


def latest_submission_for_user(db: Session, user_id: UUID) -> Optional[Submission]:
    return (
        db.query(Submission)
        .join(Participant, Submission.participant_id == Participant.id)
        .filter(Participant.user_id == user_id)
        .order_by(Submission.submitted_at.desc())
        .first()
    )
