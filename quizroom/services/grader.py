"""Per-question grading rules.

``grade_question`` is a pure function of a question and one submitted
answer. It never raises: missing answers, unknown question types and
malformed canonical answers all grade to zero, the latter two with a
data-integrity warning in the log.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from quizroom.services.question_types import QuestionType, SINGLE_ANSWER_TYPES

logger = logging.getLogger(__name__)

# fraction of full credit lost per wrongly selected option
WRONG_CHOICE_PENALTY = 0.1


@dataclass(frozen=True, slots=True)
class GradeOutcome:
    earned: int
    correct: bool


NO_CREDIT = GradeOutcome(earned=0, correct=False)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_missing(answer: Any) -> bool:
    return answer is None or answer == ""


def question_points(question) -> int:
    points = question.points
    return 1 if points is None else int(points)


def stringify(value: Any) -> str:
    """Render a decoded JSON value the way clients compare answers as text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        # nulls render empty inside a joined list
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _fold(value: Any) -> str:
    return stringify(value).lower()


def _grade_single(question, answer: Any, points: int) -> GradeOutcome:
    correct = _fold(question.answer) == _fold(answer)
    return GradeOutcome(earned=points if correct else 0, correct=correct)


def _grade_text(question, answer: Any, points: int) -> GradeOutcome:
    correct = _fold(question.answer).strip() == _fold(answer).strip()
    return GradeOutcome(earned=points if correct else 0, correct=correct)


def _grade_multi(question, answer: Any, points: int) -> GradeOutcome:
    if not isinstance(question.answer, (list, tuple, set)):
        logger.warning(
            "Data integrity: multi-choice question %s has non-list answer %r",
            question.id, question.answer,
        )
        return NO_CREDIT

    canonical = {_fold(a) for a in question.answer}
    if not canonical:
        return NO_CREDIT

    submitted = {_fold(a) for a in answer} if isinstance(answer, (list, tuple, set)) else set()
    matched = len(submitted & canonical)
    wrong = len(submitted - canonical)

    fraction = max(0.0, matched / len(canonical) - wrong * WRONG_CHOICE_PENALTY)
    correct = matched == len(canonical) and wrong == 0
    earned = round_half_up(fraction * points)
    if not correct:
        # full credit only for an exact set match
        earned = max(0, min(earned, points - 1))
    return GradeOutcome(earned=earned, correct=correct)


def grade_question(question, answer: Any) -> GradeOutcome:
    """Grade one submitted answer against ``question``.

    ``question`` is anything exposing ``id``, ``type``, ``answer`` and
    ``points`` (normally a ``Question`` row).
    """
    if is_missing(answer):
        return NO_CREDIT

    points = question_points(question)
    qtype = question.type

    if qtype in SINGLE_ANSWER_TYPES:
        return _grade_single(question, answer, points)
    if qtype == QuestionType.multi_choice.value:
        return _grade_multi(question, answer, points)
    if qtype == QuestionType.text.value:
        return _grade_text(question, answer, points)

    logger.warning("Data integrity: question %s has unknown type %r", question.id, qtype)
    return NO_CREDIT


def grade_answers(questions, answers: dict | None) -> tuple[int, dict]:
    """Grade a full answer sheet.

    Returns the total earned points and a detail entry for every question,
    answered or not, keyed by question id.
    """
    answers = answers if isinstance(answers, dict) else {}
    total = 0
    detail = {}
    for question in questions:
        key = str(question.id)
        user_answer = answers.get(key)
        outcome = grade_question(question, user_answer)
        total += outcome.earned
        detail[key] = {
            "earned": outcome.earned,
            "correct": outcome.correct,
            "user_answer": user_answer,
            "correct_answer": question.answer,
        }
    return total, detail
