"""Pydantic schemas for media admin routes."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RightMetaUpdateRequest(BaseModel):
    file: str = ""
    targets: list[str] | str | None = None
    fullPanel: bool = False
    durationSeconds: float | None = Field(default=None, gt=0)
