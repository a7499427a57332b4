from datetime import datetime


def deadline_passed(quiz, now: datetime) -> bool:
    """A quiz without a deadline counts as already closed for visibility."""
    return quiz.deadline is None or now >= quiz.deadline


def can_see_results(quiz, viewer_is_owner: bool, now: datetime) -> bool:
    return viewer_is_owner or deadline_passed(quiz, now)


def is_preview(quiz, viewer_is_owner: bool, now: datetime) -> bool:
    # owners looking before the deadline see non-final results
    return viewer_is_owner and not deadline_passed(quiz, now)


def accepts_submissions(quiz, now: datetime) -> bool:
    return quiz.deadline is None or now <= quiz.deadline


def is_owner(quiz, user) -> bool:
    return user is not None and quiz.admin_id is not None and quiz.admin_id == user.id
