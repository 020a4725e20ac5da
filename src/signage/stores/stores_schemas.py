"""Pydantic schemas for the store admin API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .stores_models import STORE_NAME_MAX_LENGTH


class StoreCreateRequest(BaseModel):
    storeId: str = ""
    name: str | None = Field(default=None, max_length=STORE_NAME_MAX_LENGTH)
