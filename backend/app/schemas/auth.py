"""Result schemas returned by the registration and login entry points."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import ClientUser


class RegistrationResult(BaseModel):
    success: bool | None = None
    message: str | None = None
    errors: dict[str, list[str]] | None = None


class AuthResult(BaseModel):
    success: bool | None = None
    user: ClientUser | None = None
    message: str | None = None


class SignupPolicy(BaseModel):
    show_signup: bool = Field(..., alias="showSignup")

    model_config = ConfigDict(populate_by_name=True)
