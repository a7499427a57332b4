from sqlalchemy.orm import Session
from quizroom.models.user_db.user_db import User
from quizroom.schemas.users.user_base import UserCreate
from quizroom.core.security import hash_password


def create_user(db: Session, user: UserCreate):
    db_user = User(
        name=user.name,
        hashed_password=hash_password(user.password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user_by_name(db: Session, name: str):
    return db.query(User).filter(User.name == name).first()