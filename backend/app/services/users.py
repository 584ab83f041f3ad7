"""User service functions for registration and authentication."""
from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app.core.security import PasswordHasher
from app.models.user import ROLE_ADMIN, ROLE_USER
from app.schemas.auth import AuthResult, RegistrationResult
from app.schemas.user import ClientUser, LoginForm, RegistrationForm
from app.services.user_store import DuplicateUserError, StoreError, UserStore

logger = logging.getLogger(__name__)

ACCOUNT_EXISTS = "An account with this email already exists."
REGISTRATION_FAILED = "An unexpected error occurred. Please try again."
INVALID_LOGIN_DATA = "Invalid data provided."
NO_USER_FOUND = "No user found with this email."
INCORRECT_PASSWORD = "Incorrect password."
LOGIN_FAILED = "An unexpected database error occurred."

FIELD_MESSAGES = {
    "email": "Invalid email address.",
    "password": "Password must be at least 6 characters long.",
}


def _field_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        message = FIELD_MESSAGES.get(field, error["msg"])
        if message not in errors.setdefault(field, []):
            errors[field].append(message)
    return errors


async def _insert_with_election(
    store: UserStore, email: str, password_hash: str, role: str
) -> str | None:
    """Insert the user, resolving constraint conflicts.

    Returns the role actually stored, or None when the email turned out to be taken.
    """
    try:
        await store.insert_user(email, password_hash, role)
        return role
    except DuplicateUserError:
        await store.rollback()
        if await store.find_by_email(email):
            return None
        if role != ROLE_ADMIN:
            raise
    # Another registration claimed the admin slot first.
    logger.info("Admin slot already claimed; registering %s as %s", email, ROLE_USER)
    await store.insert_user(email, password_hash, ROLE_USER)
    return ROLE_USER


async def register_user(store: UserStore, email: str, password: str) -> RegistrationResult:
    try:
        form = RegistrationForm(email=email, password=password)
    except ValidationError as exc:
        return RegistrationResult(errors=_field_errors(exc))

    try:
        if await store.find_by_email(form.email):
            logger.debug("Registration rejected, email already registered")
            return RegistrationResult(message=ACCOUNT_EXISTS)

        role = ROLE_USER if await store.has_users() else ROLE_ADMIN
        password_hash = await run_in_threadpool(PasswordHasher.hash, form.password)

        stored_role = await _insert_with_election(store, form.email, password_hash, role)
        if stored_role is None:
            logger.debug("Registration rejected, email registered concurrently")
            return RegistrationResult(message=ACCOUNT_EXISTS)
        await store.commit()
    except StoreError:
        logger.exception("Signup error")
        return RegistrationResult(message=REGISTRATION_FAILED)

    logger.info("Registered new %s account", stored_role)
    return RegistrationResult(success=True)


async def authenticate_user(store: UserStore, email: str, password: str) -> AuthResult:
    try:
        form = LoginForm(email=email, password=password)
    except ValidationError:
        return AuthResult(message=INVALID_LOGIN_DATA)

    try:
        rows = await store.find_by_email(form.email)
    except StoreError:
        logger.exception("Login error")
        return AuthResult(message=LOGIN_FAILED)

    if not rows:
        logger.debug("Login rejected, unknown email")
        return AuthResult(message=NO_USER_FOUND)

    user = rows[0]
    try:
        matches = await run_in_threadpool(PasswordHasher.verify, form.password, user["password"])
    except ValueError:
        logger.exception("Stored password hash for user id=%s is unreadable", user["id"])
        return AuthResult(message=LOGIN_FAILED)
    if not matches:
        logger.debug("Login rejected, password mismatch for user id=%s", user["id"])
        return AuthResult(message=INCORRECT_PASSWORD)

    client_user = ClientUser(id=str(user["id"]), email=user["email"], role=user["role"])
    return AuthResult(success=True, user=client_user)
