"""Caller-facing failures raised by the quiz services.

Every error carries a stable ``kind`` that clients can branch on, plus the
HTTP status the API layer answers with.
"""


class QuizRoomError(Exception):
    """Base exception for quiz service errors."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(QuizRoomError):
    """Raised when a quiz, participant or submission does not exist."""

    kind = "not_found"
    status_code = 404


class DeadlineExpired(QuizRoomError):
    """Raised when answers arrive after the quiz deadline."""

    kind = "deadline_expired"
    status_code = 400


class Forbidden(QuizRoomError):
    """Raised when the viewer may not see or change the resource yet."""

    kind = "forbidden"
    status_code = 403


class ValidationError(QuizRoomError):
    """Raised for malformed or missing input caught before grading."""

    kind = "validation_error"
    status_code = 400


class Conflict(QuizRoomError):
    """Raised when the request clashes with existing state."""

    kind = "conflict"
    status_code = 409


class Unauthorized(QuizRoomError):
    kind = "unauthorized"
    status_code = 401
