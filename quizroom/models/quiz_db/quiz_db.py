import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from quizroom.core.clock import utc_now
from quizroom.core.database import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        index=True
    )

    code = Column(String(12), unique=True, nullable=False, index=True)
    title = Column(String, nullable=False)
    admin_name = Column(String, nullable=True)
    admin_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)
    deadline = Column(DateTime, nullable=True)  # naive UTC
    active = Column(Boolean, default=True, nullable=False)
    started = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utc_now)

    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="[Question.order, Question.id]",
    )
    participants = relationship("Participant", back_populates="quiz", cascade="all, delete-orphan")
    submissions = relationship("Submission", back_populates="quiz", cascade="all, delete-orphan")
    admin = relationship("User")
