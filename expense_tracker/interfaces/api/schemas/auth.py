"""Schemas for registration, login and session tokens."""

from pydantic import BaseModel, EmailStr, Field

from .user import UserRead


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class SessionResponse(BaseModel):
    """Issued on login and registration; the token is also set as a cookie."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead


__all__ = ["LoginRequest", "RegisterRequest", "SessionResponse"]
