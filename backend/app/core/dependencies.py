"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_session
from app.services.app_settings import DatabaseSettingsProvider, HttpSettingsProvider, SettingsProvider
from app.services.uploads import UploadFileServer
from app.services.user_store import UserStore


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


async def get_user_store(session: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(session, timeout=get_settings().store_timeout_seconds)


async def get_settings_provider(session: AsyncSession = Depends(get_db)) -> SettingsProvider:
    settings = get_settings()
    if settings.settings_url:
        return HttpSettingsProvider(settings.settings_url, timeout=settings.settings_timeout_seconds)
    return DatabaseSettingsProvider(session)


def get_upload_server() -> UploadFileServer:
    return UploadFileServer(get_settings().upload_root)
