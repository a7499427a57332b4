from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from quizroom.schemas.common.camel_model import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    password: str = Field(min_length=6, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserOut(CamelModel):
    id: UUID
    name: str
    created_at: datetime | None = None


class AuthOut(CamelModel):
    user: UserOut
    token: str
