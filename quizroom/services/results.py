"""Leaderboards and per-participant reviews.

All ranking goes through ``rank_submissions`` so that the leaderboard and
the rank shown in a review always agree: higher score first, then the
earlier submission, then the submission id.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from quizroom.core.errors import NotFound, Forbidden
from quizroom.models.quiz_db.quiz_crud import get_quiz_by_code, get_participant, get_participants_by_name
from quizroom.models.quiz_db.submission_crud import latest_submission_for_participant, latest_submission_for_user
from quizroom.services.deadline_gate import can_see_results, deadline_passed, is_owner, is_preview
from quizroom.services.grader import grade_question, question_points, round_half_up

logger = logging.getLogger(__name__)


def total_points(questions) -> int:
    return sum(question_points(q) for q in questions)


def percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(score / total * 100)


def rank_submissions(submissions) -> list:
    return sorted(submissions, key=lambda s: (-s.score, s.submitted_at, str(s.id)))


def build_leaderboard(submissions, points_total: int) -> list[dict]:
    leaderboard = []
    for rank, sub in enumerate(rank_submissions(submissions), start=1):
        leaderboard.append({
            "id": sub.id,
            "participant_id": sub.participant_id,
            "participant": {"id": sub.participant.id, "username": sub.participant.username},
            "raw_score": sub.score,
            "score": percentage(sub.score, points_total),
            "submitted_at": sub.submitted_at,
            "rank": rank,
        })
    return leaderboard


def find_entry(leaderboard: list[dict], participant_id: Optional[UUID] = None,
               participant_name: Optional[str] = None) -> Optional[dict]:
    for entry in leaderboard:
        if participant_id is not None and entry["participant_id"] == participant_id:
            return entry
        if participant_name is not None and entry["participant"]["username"] == participant_name:
            return entry
    return None


def get_results(db: Session, code: str, viewer, now: datetime,
                participant_id: Optional[UUID] = None, participant_name: Optional[str] = None) -> dict:
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")

    owner = is_owner(quiz, viewer)
    if not can_see_results(quiz, owner, now):
        logger.info("Results for quiz %s requested before deadline", code)
        raise Forbidden("Results not available until deadline passes")

    points_total = total_points(quiz.questions)
    leaderboard = build_leaderboard(quiz.submissions, points_total)

    my_submission = None
    if participant_id is not None or participant_name:
        my_submission = find_entry(leaderboard, participant_id, participant_name or None)

    return {
        "submissions": leaderboard,
        "total_submissions": len(leaderboard),
        "total_points": points_total,
        "my_submission": my_submission,
        "preview": is_preview(quiz, owner, now),
        "quiz": {
            "title": quiz.title,
            "deadline": quiz.deadline,
            "question_count": len(quiz.questions),
        },
    }


def review_questions(questions, answers, reveal_answers: bool) -> list[dict]:
    """Re-grade every question with the submission-time rules."""
    answers = answers if isinstance(answers, dict) else {}
    reviewed = []
    for question in questions:
        user_answer = answers.get(str(question.id))
        outcome = grade_question(question, user_answer)
        reviewed.append({
            "id": question.id,
            "content": question.content,
            "type": question.type,
            "choices": question.choices,
            "correct_answer": question.answer if reveal_answers else None,
            "user_answer": user_answer,
            "is_correct": outcome.correct,
            "points": question_points(question),
            "earned_points": outcome.earned,
        })
    return reviewed


def build_review(quiz, participant, submission, now: datetime, rank_before_deadline: bool = True) -> dict:
    passed = deadline_passed(quiz, now)
    points_total = total_points(quiz.questions)
    rank = None
    if passed or rank_before_deadline:
        ranked = rank_submissions(quiz.submissions)
        rank = next((i for i, s in enumerate(ranked, start=1) if s.id == submission.id), None)

    return {
        "quiz": {
            "id": quiz.id,
            "name": quiz.title,
            "code": quiz.code,
            "deadline": quiz.deadline,
            "total_questions": len(quiz.questions),
            "total_participants": len(quiz.submissions),
            "deadline_passed": passed,
        },
        "submission": {
            "id": submission.id,
            "submitted_at": submission.submitted_at,
            "raw_score": submission.score,
            "total_points": points_total,
            "percentage": percentage(submission.score, points_total),
            "rank": rank,
        },
        "per_question": review_questions(quiz.questions, submission.answers, reveal_answers=passed),
        "participant": {"id": participant.id, "name": participant.username},
    }


def _latest_by_name(db: Session, quiz, name: str):
    participants = get_participants_by_name(db, quiz, name)
    if not participants:
        raise NotFound("No quiz attempt found for this participant name")

    candidates = []
    for participant in participants:
        submission = latest_submission_for_participant(db, participant.id)
        if submission is not None:
            candidates.append((participant, submission))
    if not candidates:
        raise NotFound("No submission found for this participant")

    return max(candidates, key=lambda pair: (pair[1].submitted_at, str(pair[1].id)))


def _resolve_participant(db: Session, quiz, participant_ref: str):
    try:
        participant_id = UUID(participant_ref)
    except ValueError:
        participant_id = None

    if participant_id is not None:
        participant = get_participant(db, quiz, participant_id)
        if participant is not None:
            submission = latest_submission_for_participant(db, participant.id)
            if submission is None:
                raise NotFound("No submission found for this participant")
            return participant, submission

    return _latest_by_name(db, quiz, participant_ref)


def get_participant_review(db: Session, code: str, participant_ref: str, viewer, now: datetime) -> dict:
    """Question-by-question review for one participant, by id or username."""
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")

    if not can_see_results(quiz, is_owner(quiz, viewer), now):
        raise Forbidden("Results not available until deadline passes")

    participant, submission = _resolve_participant(db, quiz, participant_ref)
    return build_review(quiz, participant, submission, now)


def get_guest_review(db: Session, code: str, participant_name: str, now: datetime) -> dict:
    quiz = get_quiz_by_code(db, code)
    if not quiz:
        raise NotFound("Quiz not found")

    if not can_see_results(quiz, False, now):
        raise Forbidden("Results not available until deadline passes")

    participant, submission = _latest_by_name(db, quiz, participant_name)
    return build_review(quiz, participant, submission, now)


def get_last_attempted(db: Session, user, now: datetime) -> dict:
    """Review of the user's most recent submission.

    Canonical answers and the rank stay hidden until the deadline.
    """
    submission = latest_submission_for_user(db, user.id)
    if submission is None:
        raise NotFound("No attempted quizzes found")
    return build_review(submission.quiz, submission.participant, submission, now, rank_before_deadline=False)
