"""Player-facing routes: playlists, config and legacy heartbeat/status aliases.

Playlists are served from the stored documents as they are; reads never
trigger regeneration.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..api.services import get_config, get_playlist_builder, get_status_tracker
from ..config import AppConfig
from ..playlists.playlist_builder import PlaylistBuilder
from ..playlists.right_meta import targets_include
from ..status.status_api import record_heartbeat_payload
from ..status.status_schemas import HeartbeatRequest
from ..status.status_service import StatusTracker
from ..storage.keys import Side
from ..stores.stores_models import normalize_store_id

router = APIRouter(prefix="/api", tags=["player"])

NO_STORE = {"cache-control": "no-store"}


def visible_right_items(document: dict[str, Any], store_id: str) -> list[dict[str, Any]]:
    """Right items whose targets are empty or name ``store_id``."""
    return [item for item in document.get("items", []) if targets_include(item.get("targets"), store_id)]


@router.get("/playlists/left")
def left_playlist(
    store: str = Query(""),
    builder: PlaylistBuilder = Depends(get_playlist_builder),
) -> JSONResponse:
    document = builder.read_playlist(Side.LEFT, normalize_store_id(store))
    return JSONResponse(document, headers=NO_STORE)


@router.get("/playlists/right")
def right_playlist(builder: PlaylistBuilder = Depends(get_playlist_builder)) -> JSONResponse:
    return JSONResponse(builder.read_playlist(Side.RIGHT), headers=NO_STORE)


@router.get("/player/config")
def player_config(
    storeId: str = Query(""),
    builder: PlaylistBuilder = Depends(get_playlist_builder),
    config: AppConfig = Depends(get_config),
) -> JSONResponse:
    store_id = normalize_store_id(storeId)
    left = builder.read_playlist(Side.LEFT, store_id)
    right = builder.read_playlist(Side.RIGHT)
    payload = {
        "storeId": store_id,
        "left": left.get("items", []),
        "right": visible_right_items(right, store_id),
        "onlineTtlSeconds": config.online_ttl_seconds,
    }
    return JSONResponse(payload, headers=NO_STORE)


@router.get("/playlist.json")
def legacy_playlist(
    store: str = Query(""),
    side: str = Query("left"),
    builder: PlaylistBuilder = Depends(get_playlist_builder),
) -> JSONResponse:
    """Bare item array for older players; unknown sides fall back to left."""
    store_id = normalize_store_id(store)
    resolved = Side.RIGHT if side.strip().lower() == Side.RIGHT.value else Side.LEFT
    document = builder.read_playlist(resolved, store_id if resolved is Side.LEFT else None)
    return JSONResponse(document.get("items", []), headers=NO_STORE)


@router.post("/heartbeat")
def legacy_heartbeat(
    payload: HeartbeatRequest | None = None,
    tracker: StatusTracker = Depends(get_status_tracker),
) -> dict[str, Any]:
    return record_heartbeat_payload(payload or HeartbeatRequest(), tracker)


@router.get("/status")
def legacy_status(
    store: str = Query(""),
    tracker: StatusTracker = Depends(get_status_tracker),
) -> dict[str, Any]:
    return tracker.get_status(normalize_store_id(store)).to_legacy_dict()
