"""Password hashing helpers."""
from __future__ import annotations

from functools import lru_cache

from passlib.context import CryptContext

from .config import get_settings


@lru_cache
def _password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["argon2"],
        deprecated="auto",
        argon2__time_cost=settings.password_time_cost,
    )


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context().hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context().verify(password, hashed)
