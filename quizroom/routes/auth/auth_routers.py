import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.core.errors import Conflict, NotFound, Unauthorized
from quizroom.core.security import (
    verify_password,
    create_access_token,
    get_current_user,
    optional_oauth2_scheme,
    revoke_token,
)
from quizroom.models.user_db.user_db import User
from quizroom.models.user_db.user_db_crud import create_user, get_user_by_name
from quizroom.schemas.login.login_base import LoginRequest
from quizroom.schemas.users.user_base import AuthOut, UserCreate, UserOut

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _token_for(user: User) -> str:
    return create_access_token({"sub": str(user.id), "name": user.name})


@auth_router.post("/signup", response_model=AuthOut)
def signup(payload: UserCreate, db: Session = Depends(get_db)):
    if get_user_by_name(db, payload.name):
        raise Conflict("Username already exists")

    user = create_user(db, payload)
    return {"user": user, "token": _token_for(user)}


@auth_router.post("/login", response_model=AuthOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_name(db, payload.name)
    if not user:
        raise NotFound("User not found")
    if not verify_password(payload.password, user.hashed_password):
        logger.info("Failed login for %s", payload.name)
        raise Unauthorized("Invalid password")

    return {"user": user, "token": _token_for(user)}


@auth_router.post("/logout")
def logout(token: str = Depends(optional_oauth2_scheme), current_user: User = Depends(get_current_user)):
    revoke_token(token)
    return {"message": "Logged out successfully"}


@auth_router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
