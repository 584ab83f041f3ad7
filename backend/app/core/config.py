"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="ACCOUNTS_",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = "Accounts & Uploads"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./accounts.db"
    store_timeout_seconds: float = 10.0

    # Security
    password_time_cost: int = 3
    allowed_origins: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://localhost:3000",
        "https://127.0.0.1:3000",
    ]

    # Uploads
    upload_root: Path = Path("public/uploads")

    # Signup policy
    settings_url: str | None = None  # External settings service; built-in table when unset
    settings_timeout_seconds: float = 5.0
    default_allow_signups: bool = False

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
