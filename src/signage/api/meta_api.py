"""Health check and service metadata for admin and player pages."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..config import AppConfig
from .services import get_config

router = APIRouter(tags=["meta"])


@router.get("/", response_class=PlainTextResponse)
def health() -> str:
    return "ok"


@router.get("/api/meta")
def service_meta(config: AppConfig = Depends(get_config)) -> dict[str, Any]:
    return {
        "ok": True,
        "publicBaseUrl": config.public_base_url,
        "playerBaseUrl": config.player_base_url,
        "onlineTtlSeconds": config.online_ttl_seconds,
        "imageDurationSeconds": config.image_duration_seconds,
    }
