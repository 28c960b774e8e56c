import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Role = Literal["learner", "mentor", "admin"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72


def normalize_email(value: str) -> str:
    cleaned = value.strip().lower()
    if not EMAIL_PATTERN.match(cleaned):
        raise ValueError("Invalid email format")
    return cleaned


def validate_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    return value


def normalize_name(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("This field is required")
    return cleaned


class AccountResponse(BaseModel):
    """Account as shown to clients; the password hash never leaves the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def normalize_optional_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_name(value)

    @field_validator("email")
    @classmethod
    def normalize_optional_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_email(value)


class AdminAccountUpdate(ProfileUpdate):
    role: Optional[Role] = None

    @model_validator(mode="after")
    def validate_changes(self) -> "AdminAccountUpdate":
        if self.name is None and self.email is None and self.role is None:
            raise ValueError("At least one field must be provided")
        return self


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password(value)


class AccountOverview(BaseModel):
    total_users: int
    learners: int
    mentors: int
    admins: int
    recent_signups: int
    active_sessions: int
