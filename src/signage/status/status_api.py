"""TV heartbeat and status routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ..api.services import get_status_tracker
from ..stores.stores_models import normalize_store_id
from .status_schemas import HeartbeatRequest
from .status_service import StatusTracker

router = APIRouter(prefix="/api/tv", tags=["tv"])


def record_heartbeat_payload(payload: HeartbeatRequest, tracker: StatusTracker) -> dict[str, Any]:
    store_id = normalize_store_id(payload.store_value)
    device_id = (payload.deviceId or "").strip()[:64] or None
    last_seen = tracker.record_heartbeat(store_id, device_id=device_id)
    return {"ok": True, "storeId": store_id, "lastSeen": last_seen}


@router.post("/heartbeat")
def heartbeat(
    payload: HeartbeatRequest | None = None,
    tracker: StatusTracker = Depends(get_status_tracker),
) -> dict[str, Any]:
    return record_heartbeat_payload(payload or HeartbeatRequest(), tracker)


@router.get("/status")
def tv_status(
    store: str = Query(""),
    tracker: StatusTracker = Depends(get_status_tracker),
) -> dict[str, Any]:
    return tracker.get_status(normalize_store_id(store)).to_dict()
