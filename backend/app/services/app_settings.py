"""Providers for application-wide settings such as the public signup flag."""
from __future__ import annotations

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.app_setting import ALLOW_SIGNUPS_KEY, AppSetting
from app.schemas.settings import AppSettings

logger = logging.getLogger(__name__)


class SettingsUnavailableError(RuntimeError):
    """Raised when application settings cannot be read."""


class SettingsProvider(Protocol):
    async def fetch(self) -> AppSettings:
        ...


class StaticSettingsProvider:
    """Return a fixed ``AppSettings``; substitutes for a real provider."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    async def fetch(self) -> AppSettings:
        return self._settings


class DatabaseSettingsProvider:
    """Read settings from the ``app_settings`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def fetch(self) -> AppSettings:
        try:
            result = await self._session.execute(
                select(AppSetting.value).where(AppSetting.key == ALLOW_SIGNUPS_KEY)
            )
            value = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise SettingsUnavailableError(str(exc)) from exc
        return AppSettings(allow_signups=bool(value))


class HttpSettingsProvider:
    """Fetch settings from an external JSON endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> AppSettings:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url)
        except httpx.HTTPError as exc:
            raise SettingsUnavailableError(f"Settings request failed: {exc}") from exc
        if response.status_code >= 400:
            raise SettingsUnavailableError(f"Settings response {response.status_code}: {response.text}")
        try:
            return AppSettings.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SettingsUnavailableError(f"Malformed settings payload: {exc}") from exc


async def ensure_default_settings(session: AsyncSession, allow_signups: bool) -> None:
    """Seed the signup flag if it has never been stored."""

    existing = await session.get(AppSetting, ALLOW_SIGNUPS_KEY)
    if existing is None:
        session.add(AppSetting(key=ALLOW_SIGNUPS_KEY, value=allow_signups))
        await session.commit()
        logger.info("Seeded %s=%s", ALLOW_SIGNUPS_KEY, allow_signups)
