"""Admin media routes for store (left) and common (right) collections."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from fastapi import APIRouter, Depends, File, Query, UploadFile

from ..api.services import get_media_service
from ..exceptions import InvalidInputError, PayloadTooLargeError
from ..storage.keys import Side
from ..stores.stores_models import normalize_store_id
from .media_schemas import RightMetaUpdateRequest
from .media_service import UNSET, MediaService

router = APIRouter(prefix="/api", tags=["media"])
logger = structlog.get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


async def _read_upload(upload: UploadFile | None, limit: int) -> tuple[bytes, str | None]:
    """Read the upload in chunks, stopping as soon as it exceeds ``limit`` bytes."""
    if upload is None:
        raise InvalidInputError("file required")
    chunks: list[bytes] = []
    size = 0
    try:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                logger.warning("media.upload.payload_too_large", size_bytes=size, limit_bytes=limit)
                raise PayloadTooLargeError(f"upload exceeds limit of {limit} bytes")
            chunks.append(chunk)
    finally:
        await upload.close()
    return b"".join(chunks), upload.content_type


@router.get("/stores/{store_id}/left")
def list_left_media(store_id: str, service: MediaService = Depends(get_media_service)) -> dict[str, Any]:
    items = service.list_media(Side.LEFT, normalize_store_id(store_id))
    return {"ok": True, "items": items}


@router.get("/stores/{store_id}/media")
def list_store_media(
    store_id: str,
    side: Side = Query(Side.LEFT),
    service: MediaService = Depends(get_media_service),
) -> dict[str, Any]:
    items = service.list_media(side, normalize_store_id(store_id))
    return {"ok": True, "items": items}


@router.post("/stores/{store_id}/left")
async def upload_left_media(
    store_id: str,
    file: UploadFile | None = File(None),
    service: MediaService = Depends(get_media_service),
) -> dict[str, Any]:
    owner = normalize_store_id(store_id)
    data, content_type = await _read_upload(file, service.max_upload_bytes)
    result = await asyncio.to_thread(service.upload_media, Side.LEFT, data, content_type, owner)
    return {"ok": True, **result.to_dict()}


@router.delete("/stores/{store_id}/left/{file_name}")
def delete_left_media(
    store_id: str, file_name: str, service: MediaService = Depends(get_media_service)
) -> dict[str, Any]:
    key = service.delete_media(Side.LEFT, file_name, normalize_store_id(store_id))
    return {"ok": True, "key": key}


@router.post("/stores/{store_id}/playlists/refresh")
def refresh_store_playlists(
    store_id: str, service: MediaService = Depends(get_media_service)
) -> dict[str, Any]:
    owner = normalize_store_id(store_id)
    left = service.refresh(Side.LEFT, owner)
    right = service.refresh(Side.RIGHT)
    return {"ok": True, "left": left, "right": right}


@router.get("/common/right")
def list_right_media(service: MediaService = Depends(get_media_service)) -> dict[str, Any]:
    return {"ok": True, "items": service.list_media(Side.RIGHT)}


@router.post("/common/right")
async def upload_right_media(
    file: UploadFile | None = File(None),
    service: MediaService = Depends(get_media_service),
) -> dict[str, Any]:
    data, content_type = await _read_upload(file, service.max_upload_bytes)
    result = await asyncio.to_thread(service.upload_media, Side.RIGHT, data, content_type)
    return {"ok": True, **result.to_dict()}


@router.put("/common/right/meta")
def update_right_meta(
    payload: RightMetaUpdateRequest,
    service: MediaService = Depends(get_media_service),
) -> dict[str, Any]:
    duration = payload.durationSeconds if "durationSeconds" in payload.model_fields_set else UNSET
    record = service.update_right_meta(
        payload.file,
        targets=payload.targets,
        full_panel=payload.fullPanel,
        duration_seconds=duration,
    )
    return {"ok": True, "item": record.to_dict()}


@router.post("/common/right/refresh")
def refresh_right_playlist(service: MediaService = Depends(get_media_service)) -> dict[str, Any]:
    return {"ok": True, "right": service.refresh(Side.RIGHT)}


@router.delete("/common/right/{file_name}")
def delete_right_media(file_name: str, service: MediaService = Depends(get_media_service)) -> dict[str, Any]:
    key = service.delete_media(Side.RIGHT, file_name)
    return {"ok": True, "key": key}
