from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core import security
from app.core.config import get_settings
from app.db import session as db_session
from app.main import app


def _clear_caches() -> None:
    get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session.get_session_factory.cache_clear()
    security._password_context.cache_clear()


@pytest.fixture
def env(tmp_path: Path, monkeypatch) -> Iterator[Path]:
    monkeypatch.setenv("ACCOUNTS_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}")
    monkeypatch.setenv("ACCOUNTS_UPLOAD_ROOT", str(tmp_path / "uploads"))
    monkeypatch.setenv("ACCOUNTS_PASSWORD_TIME_COST", "1")
    _clear_caches()
    yield tmp_path
    app.dependency_overrides.clear()
    _clear_caches()


@pytest.fixture
def client(env: Path) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
