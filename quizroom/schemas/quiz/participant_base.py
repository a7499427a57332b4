from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from quizroom.schemas.common.camel_model import CamelModel


class JoinRequest(CamelModel):
    username: Optional[str] = Field(default=None, max_length=50)


class ParticipantOut(CamelModel):
    id: UUID
    quiz_id: UUID
    username: str
    user_id: Optional[UUID] = None
    joined_at: Optional[datetime] = None


class ParticipantRef(CamelModel):
    id: UUID
    username: str


class JoinOut(CamelModel):
    participant: ParticipantOut
