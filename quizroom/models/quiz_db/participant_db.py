import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from quizroom.core.clock import utc_now
from quizroom.core.database import Base


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id"), nullable=False, index=True)
    username = Column(String, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)  # anonymous if null
    joined_at = Column(DateTime, default=utc_now)

    quiz = relationship("Quiz", back_populates="participants")
    submissions = relationship("Submission", back_populates="participant", cascade="all, delete-orphan")
