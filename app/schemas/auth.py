from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.users import (
    AccountResponse,
    normalize_email,
    normalize_name,
    validate_password,
)


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    password: str
    # admins are only created by seeding or by another admin
    role: Literal["learner", "mentor"] = "learner"

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return normalize_name(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class AuthResponse(BaseModel):
    success: bool = True
    user: AccountResponse


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[AccountResponse] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
