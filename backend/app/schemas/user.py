"""Pydantic schemas for user input and projections."""
from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _bare_email(value: str) -> str:
    # Display-name forms such as "Name <addr>" are not accepted.
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc


class RegistrationForm(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _bare_email(value)


class LoginForm(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _bare_email(value)


class ClientUser(BaseModel):
    """User projection safe to return to clients; never carries the password."""

    id: str
    email: str
    role: str

    model_config = ConfigDict(extra="ignore")
