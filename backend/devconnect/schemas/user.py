"""User Schemas: registration, login, token and public user shapes."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from devconnect.schemas.validators import require_text


class UserCreate(BaseModel):
    """Registration: name required, valid email, password >= 6 chars."""
    name: str = Field(max_length=200)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return require_text(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """Public user record; the password hash is never part of it."""
    id: UUID
    name: str
    email: str
    avatar: str | None = None
    date: datetime

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id, name=user.name, email=user.email,
            avatar=user.avatar, date=user.date,
        )
