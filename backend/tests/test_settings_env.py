from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import app


def test_settings_from_env(env: Path, monkeypatch) -> None:
    monkeypatch.setenv("ACCOUNTS_ALLOWED_ORIGINS", "https://shop.acme.io, https://admin.acme.io")
    monkeypatch.setenv("ACCOUNTS_STORE_TIMEOUT_SECONDS", "2.5")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.allowed_origins == ["https://shop.acme.io", "https://admin.acme.io"]
    assert settings.store_timeout_seconds == 2.5
    assert settings.upload_root == env / "uploads"
    assert settings.settings_url is None


def test_default_allow_signups_is_seeded(env: Path, monkeypatch) -> None:
    monkeypatch.setenv("ACCOUNTS_DEFAULT_ALLOW_SIGNUPS", "true")
    get_settings.cache_clear()

    with TestClient(app) as client:
        assert client.get("/api/settings").json() == {"allowSignups": True}
        assert (env / "uploads").is_dir()
