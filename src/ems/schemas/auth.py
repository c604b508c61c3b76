from datetime import time
from typing import Any, Literal
from uuid import UUID

from pydantic import EmailStr, Field, HttpUrl, PositiveInt, field_validator

from src.ems.core.security.validators import validate_password_strength, validate_time_of_day
from src.ems.schemas.base import CamelModel


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _dedupe(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class LoginRequest(CamelModel):
    email_id: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email_id", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)


class LoginResponse(CamelModel):
    token: str
    refresh_token: str


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class VerifyEmailRequest(CamelModel):
    email_id: EmailStr

    @field_validator("email_id", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)


class VerifyEmailResponse(CamelModel):
    available: bool


class ShiftCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)
    start_time: time = Field(json_schema_extra={"examples": ["09:00"]})
    end_time: time = Field(json_schema_extra={"examples": ["17:00"]})

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time_of_day(cls, v: Any) -> time:
        if not isinstance(v, str):
            raise ValueError("Time must be a string in 24-hour HH:MM format")
        return validate_time_of_day(v)


class SignupRequest(CamelModel):
    """Signup creates a user together with a new workspace."""

    email_id: EmailStr
    password: str = Field(min_length=8, max_length=128)
    workspace_name: str = Field(min_length=1, max_length=100)
    admin_name: str = Field(min_length=1, max_length=100)
    workspace_logo: HttpUrl | Literal[""] | None = None
    role: PositiveInt
    departments: list[PositiveInt] = Field(min_length=1)
    designations: list[PositiveInt] = Field(min_length=1)
    shifts: list[ShiftCreate] = Field(min_length=1)

    @field_validator("email_id", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)

    @field_validator("workspace_name", "admin_name", mode="before")
    @classmethod
    def strip_names(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("departments", "designations")
    @classmethod
    def drop_duplicate_ids(cls, v: list[int]) -> list[int]:
        return _dedupe(v)

    @property
    def logo(self) -> str:
        return str(self.workspace_logo) if self.workspace_logo else ""


class WorkspaceSummary(CamelModel):
    id: UUID
    workspace_name: str
    workspace_logo: str


class UserSummary(CamelModel):
    id: UUID
    email_id: str


class SignupResponse(CamelModel):
    token: str
    refresh_token: str
    workspace: WorkspaceSummary
    user: UserSummary
