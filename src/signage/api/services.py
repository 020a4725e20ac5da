"""Dependency lookups resolving services from application state."""

from __future__ import annotations

from fastapi import Request

from ..config import AppConfig
from ..media.media_service import MediaService
from ..playlists.playlist_builder import PlaylistBuilder
from ..status.status_service import StatusTracker
from ..stores.stores_service import StoreService


def get_config(request: Request) -> AppConfig:
    try:
        return request.app.state.config  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AppConfig is not configured") from exc


def get_store_service(request: Request) -> StoreService:
    try:
        return request.app.state.store_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("StoreService is not configured") from exc


def get_media_service(request: Request) -> MediaService:
    try:
        return request.app.state.media_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("MediaService is not configured") from exc


def get_playlist_builder(request: Request) -> PlaylistBuilder:
    try:
        return request.app.state.playlist_builder  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("PlaylistBuilder is not configured") from exc


def get_status_tracker(request: Request) -> StatusTracker:
    try:
        return request.app.state.status_tracker  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("StatusTracker is not configured") from exc
