"""Schemas for the application settings collaborator."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AppSettings(BaseModel):
    allow_signups: bool = Field(default=False, alias="allowSignups")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
