from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from quizroom.core.clock import to_naive_utc
from quizroom.schemas.common.camel_model import CamelModel


class QuizBase(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    admin_name: Optional[str] = None
    deadline: Optional[datetime] = None

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class QuizCreate(QuizBase):
    pass


class QuizUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    deadline: Optional[datetime] = None
    active: Optional[bool] = None

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class QuizOut(QuizBase):
    id: UUID
    code: str
    admin_id: Optional[UUID] = None
    active: bool
    started: bool
    created_at: Optional[datetime] = None


class QuizSummaryOut(QuizOut):
    question_count: int
    participant_count: int
    submission_count: int


class PublicQuestionOut(CamelModel):
    id: UUID
    order: int
    content: str
    type: str
    choices: Optional[List[str]] = None
    points: int


class PublicQuizOut(CamelModel):
    id: UUID
    code: str
    title: str
    admin_name: Optional[str] = None
    active: bool
    deadline: Optional[datetime] = None
    started: bool
    participants: List[str]
    questions: List[PublicQuestionOut]

