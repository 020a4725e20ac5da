"""Pydantic schemas for heartbeat routes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HeartbeatRequest(BaseModel):
    """Players send either ``store`` or ``storeId``; extra fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    store: str | None = None
    storeId: str | None = None
    deviceId: str | None = None

    @property
    def store_value(self) -> str:
        return self.store or self.storeId or ""
