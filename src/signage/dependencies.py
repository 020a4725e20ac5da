"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.meta_api import router as meta_router
from .clock import Clock, epoch_ms
from .config import AppConfig
from .media.media_api import router as media_router
from .media.media_service import MediaService
from .player.player_api import router as player_router
from .playlists.playlist_builder import PlaylistBuilder
from .playlists.right_meta import RightMetaStore
from .status.status_api import router as status_router
from .status.status_repository import TvStatusRepository
from .status.status_service import StatusTracker
from .storage.keys import KeyLayout
from .storage.object_store import FilesystemObjectStore, ObjectStore
from .stores.stores_api import router as stores_router
from .stores.stores_repository import StoreRepository
from .stores.stores_service import StoreService


def include_routers(
    app: FastAPI,
    config: AppConfig,
    *,
    object_store: ObjectStore | None = None,
    clock: Clock = epoch_ms,
) -> None:
    """Build services, attach them to ``app.state`` and mount routers."""
    store = object_store or FilesystemObjectStore(config.storage_root)
    layout = KeyLayout(root=config.collection_root)

    store_repo = StoreRepository(config.session_factory)
    status_repo = TvStatusRepository(config.session_factory)
    status_tracker = StatusTracker(repo=status_repo, ttl_seconds=config.online_ttl_seconds, clock=clock)
    meta_store = RightMetaStore(store=store, layout=layout)
    playlist_builder = PlaylistBuilder(
        store=store,
        layout=layout,
        meta_store=meta_store,
        public_base_url=config.public_base_url,
        image_duration_seconds=config.image_duration_seconds,
        clock=clock,
    )
    media_service = MediaService(
        store=store,
        layout=layout,
        stores=store_repo,
        playlists=playlist_builder,
        meta_store=meta_store,
        max_upload_bytes=config.max_upload_bytes,
    )
    store_service = StoreService(
        repo=store_repo,
        store=store,
        layout=layout,
        playlists=playlist_builder,
        status=status_tracker,
        player_base_url=config.player_base_url,
    )

    app.state.config = config
    app.state.object_store = store
    app.state.store_repo = store_repo
    app.state.status_tracker = status_tracker
    app.state.playlist_builder = playlist_builder
    app.state.media_service = media_service
    app.state.store_service = store_service

    app.include_router(meta_router)
    app.include_router(stores_router)
    app.include_router(media_router)
    app.include_router(status_router)
    app.include_router(player_router)

    if isinstance(store, FilesystemObjectStore):
        app.mount("/media", StaticFiles(directory=store.root), name="media")
