"""Registration, login and signup-policy endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form

from app.core.dependencies import get_settings_provider, get_user_store
from app.schemas.auth import AuthResult, RegistrationResult, SignupPolicy
from app.services.app_settings import SettingsProvider
from app.services.signup_policy import is_signup_allowed
from app.services.user_store import UserStore
from app.services.users import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegistrationResult, response_model_exclude_none=True)
async def register(
    email: str = Form(""),
    password: str = Form(""),
    store: UserStore = Depends(get_user_store),
) -> RegistrationResult:
    return await register_user(store, email, password)


@router.post("/login", response_model=AuthResult, response_model_exclude_none=True)
async def login(
    email: str = Form(""),
    password: str = Form(""),
    store: UserStore = Depends(get_user_store),
) -> AuthResult:
    # No session is issued here; the caller decides what to do with the user.
    return await authenticate_user(store, email, password)


@router.get("/signup-policy", response_model=SignupPolicy)
async def signup_policy(
    store: UserStore = Depends(get_user_store),
    settings_provider: SettingsProvider = Depends(get_settings_provider),
) -> SignupPolicy:
    return SignupPolicy(show_signup=await is_signup_allowed(store, settings_provider))
