"""Admin store routes (list, create, detail)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from ..api.services import get_store_service
from .stores_schemas import StoreCreateRequest
from .stores_service import StoreService

router = APIRouter(prefix="/api/stores", tags=["stores"])


@router.get("")
def list_stores(service: StoreService = Depends(get_store_service)) -> dict[str, Any]:
    return {"items": service.list_stores()}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_store(
    payload: StoreCreateRequest,
    service: StoreService = Depends(get_store_service),
) -> dict[str, Any]:
    store = service.create_store(payload.storeId, payload.name)
    return {
        "ok": True,
        "storeId": store.store_id,
        "name": store.name,
        "playerUrl": service.player_url(store.store_id),
    }


@router.get("/{store_id}")
def fetch_store(store_id: str, service: StoreService = Depends(get_store_service)) -> dict[str, Any]:
    return service.store_detail(store_id)
