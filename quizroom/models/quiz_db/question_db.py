import uuid
from sqlalchemy import Column, String, Text, Integer, ForeignKey, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from quizroom.core.database import Base


class Question(Base):
    __tablename__ = "questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    type = Column(String, nullable=False)  # single-choice | multiple-choice | multi-choice | text
    choices = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)  # [str]
    answer = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)  # str or [str]
    points = Column(Integer, nullable=False, default=1)
    order = Column(Integer, nullable=False, default=0)

    quiz = relationship("Quiz", back_populates="questions")
