"""Public read access to application settings."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.settings import AppSettings
from app.services.app_settings import DatabaseSettingsProvider, SettingsUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=AppSettings)
async def read_settings(session: AsyncSession = Depends(get_db)) -> AppSettings:
    try:
        return await DatabaseSettingsProvider(session).fetch()
    except SettingsUnavailableError as exc:
        logger.exception("Failed to read settings")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Settings unavailable"
        ) from exc
