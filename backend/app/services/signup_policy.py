"""Decide whether public registration is exposed."""
from __future__ import annotations

import logging

from app.services.app_settings import SettingsProvider, SettingsUnavailableError
from app.services.user_store import StoreError, UserStore

logger = logging.getLogger(__name__)


async def is_signup_allowed(store: UserStore, settings_provider: SettingsProvider) -> bool:
    """Return True when the signup path should be shown.

    With no admin in the store signup is always open so the first administrator
    can be created. Otherwise the ``allowSignups`` flag decides, and an
    unreadable flag closes signup.
    """
    try:
        admin_exists = await store.admin_exists()
    except StoreError:
        # Assume an admin may exist and let the flag decide.
        logger.exception("Failed to check for admin user")
        admin_exists = True

    if not admin_exists:
        return True

    try:
        app_settings = await settings_provider.fetch()
    except SettingsUnavailableError:
        logger.exception("Failed to fetch settings, defaulting to not allow signups")
        return False
    return app_settings.allow_signups
