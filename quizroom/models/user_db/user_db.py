import uuid
from sqlalchemy import Column, String, DateTime, Uuid
from quizroom.core.clock import utc_now
from quizroom.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        index=True
    )

    name = Column(String(50), unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utc_now)
