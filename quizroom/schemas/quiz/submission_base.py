from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from quizroom.schemas.common.camel_model import CamelModel
from quizroom.schemas.quiz.participant_base import ParticipantRef


class SubmitAnswersIn(CamelModel):
    participant_id: UUID
    answers: Dict[str, Any] = Field(default_factory=dict)


class SubmissionOut(CamelModel):
    id: UUID
    participant_id: UUID
    quiz_id: UUID
    answers: Dict[str, Any]
    score: int
    submitted_at: datetime


class QuestionDetail(CamelModel):
    earned: int
    correct: bool
    user_answer: Any = None
    correct_answer: Any = None


class SubmitAnswersOut(CamelModel):
    submission: SubmissionOut
    score: int
    detail: Dict[str, QuestionDetail]


class LeaderboardEntry(CamelModel):
    id: UUID
    participant_id: UUID
    participant: ParticipantRef
    raw_score: int
    score: int  # percentage of total points
    submitted_at: datetime
    rank: int


class ResultsQuizInfo(CamelModel):
    title: str
    deadline: Optional[datetime] = None
    question_count: int


class ResultsOut(CamelModel):
    submissions: List[LeaderboardEntry]
    total_submissions: int
    total_points: int
    my_submission: Optional[LeaderboardEntry] = None
    preview: bool
    quiz: ResultsQuizInfo


class ReviewQuizInfo(CamelModel):
    id: UUID
    name: str
    code: str
    deadline: Optional[datetime] = None
    total_questions: int
    total_participants: int
    deadline_passed: bool


class ReviewSubmissionInfo(CamelModel):
    id: UUID
    submitted_at: datetime
    raw_score: int
    total_points: int
    percentage: int
    rank: Optional[int] = None


class QuestionReview(CamelModel):
    id: UUID
    content: str
    type: str
    choices: Optional[List[str]] = None
    correct_answer: Any = None
    user_answer: Any = None
    is_correct: bool
    points: int
    earned_points: int


class ReviewParticipantInfo(CamelModel):
    id: UUID
    name: str


class ReviewOut(CamelModel):
    quiz: ReviewQuizInfo
    submission: ReviewSubmissionInfo
    per_question: List[QuestionReview]
    participant: ReviewParticipantInfo


class GuestResultsRequest(CamelModel):
    code: str = Field(min_length=1)
    participant_name: str = Field(min_length=1)
