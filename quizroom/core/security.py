import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from quizroom.core.clock import utc_now
from quizroom.core.config import settings
from quizroom.core.database import get_db
from quizroom.core.errors import Unauthorized
from quizroom.models.user_db.user_db import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# revoked on logout; lives as long as the process
revoked_tokens: set[str] = set()


# Password hashing
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Token generation
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = utc_now() + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def revoke_token(token: str) -> None:
    revoked_tokens.add(token)


# Token verification
def verify_token(token: str) -> dict:
    if token in revoked_tokens:
        raise Unauthorized("Token has been revoked")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        raise Unauthorized("Invalid or expired token")


def _user_from_payload(db: Session, payload: dict) -> Optional[User]:
    sub = payload.get("sub")
    if not sub:
        return None
    try:
        user_id = UUID(sub)
    except ValueError:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_current_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    if not token:
        raise Unauthorized("Authentication required")
    payload = verify_token(token)
    user = _user_from_payload(db, payload)
    if not user:
        raise Unauthorized("Invalid token payload")

    return user


def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Resolve the caller if a valid bearer token is present, else ``None``.

    Invalid or revoked tokens are treated as anonymous access.
    """
    if not token:
        return None
    try:
        payload = verify_token(token)
    except Unauthorized:
        logger.info("Ignoring invalid bearer token on optional-auth route")
        return None
    return _user_from_payload(db, payload)
