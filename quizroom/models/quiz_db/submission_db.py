import uuid
from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from quizroom.core.clock import utc_now
from quizroom.core.database import Base


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    participant_id = Column(Uuid, ForeignKey("participants.id"), nullable=False, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id"), nullable=False, index=True)
    answers = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)  # {question_id: answer}
    score = Column(Integer, nullable=False, default=0)
    submitted_at = Column(DateTime, default=utc_now, nullable=False)

    participant = relationship("Participant", back_populates="submissions")
    quiz = relationship("Quiz", back_populates="submissions")
