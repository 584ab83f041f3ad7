"""Credential store gateway over the ``users`` table.

Every call returns plain row dictionaries so callers never depend on the
driver's result shape. Statements are built with SQLAlchemy constructs and
bound parameters only.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import ROLE_ADMIN, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_COLUMNS = (User.id, User.email, User.role, User.password_hash.label("password"))


class StoreError(RuntimeError):
    """Raised when the credential store cannot complete an operation."""


class DuplicateUserError(StoreError):
    """Raised when an insert violates a uniqueness constraint."""


class UserStore:
    """Parameterized reads and writes against the users table."""

    def __init__(self, session: AsyncSession, timeout: float | None = None) -> None:
        self._session = session
        self._timeout = timeout

    async def _guard(self, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise StoreError(f"Store call exceeded {self._timeout}s") from exc
        except IntegrityError as exc:
            raise DuplicateUserError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    async def _rows(self, statement: Select) -> list[dict[str, Any]]:
        result = await self._guard(self._session.execute(statement))
        return [dict(row) for row in result.mappings().all()]

    async def find_by_email(self, email: str) -> list[dict[str, Any]]:
        return await self._rows(select(*_USER_COLUMNS).where(User.email == email))

    async def has_users(self) -> bool:
        rows = await self._rows(select(User.id).limit(1))
        return bool(rows)

    async def admin_exists(self) -> bool:
        rows = await self._rows(select(User.id).where(User.role == ROLE_ADMIN).limit(1))
        return bool(rows)

    async def insert_user(self, email: str, password_hash: str, role: str) -> dict[str, Any]:
        user = User(email=email, password_hash=password_hash, role=role)
        self._session.add(user)
        await self._guard(self._session.flush())
        logger.debug("Inserted user id=%s role=%s", user.id, role)
        return {"id": user.id, "email": user.email, "role": user.role}

    async def commit(self) -> None:
        await self._guard(self._session.commit())

    async def rollback(self) -> None:
        await self._guard(self._session.rollback())
