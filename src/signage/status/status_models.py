"""Status values and the pure derivation rule."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class StatusValue(StrEnum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    UNKNOWN = "UNKNOWN"


@dataclass(slots=True)
class StoreStatus:
    store_id: str
    status: StatusValue
    last_seen: int | None

    @property
    def online(self) -> bool:
        return self.status is StatusValue.ONLINE

    def to_dict(self) -> dict[str, Any]:
        return {"storeId": self.store_id, "status": self.status.value, "lastSeen": self.last_seen}

    def to_legacy_dict(self) -> dict[str, Any]:
        """Shape expected by older player builds."""
        return {"online": self.online, "lastSeen": self.last_seen}


def derive_status(last_seen: int | None, now: int, ttl_seconds: int) -> StatusValue:
    """ONLINE while ``now - last_seen <= ttl``; the bound itself is inclusive."""
    if last_seen is None:
        return StatusValue.UNKNOWN
    if now - last_seen <= ttl_seconds * 1000:
        return StatusValue.ONLINE
    return StatusValue.OFFLINE
