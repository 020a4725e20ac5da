"""Store creation and admin-facing store views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import structlog

from ..exceptions import InvalidInputError
from ..playlists.playlist_builder import PlaylistBuilder
from ..status.status_service import StatusTracker
from ..storage.keys import KeyLayout
from ..storage.object_store import ObjectStore
from .stores_models import STORE_NAME_MAX_LENGTH, Store, normalize_store_id
from .stores_repository import StoreRepository

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class StoreService:
    repo: StoreRepository
    store: ObjectStore
    layout: KeyLayout
    playlists: PlaylistBuilder
    status: StatusTracker
    player_base_url: str

    def create_store(self, raw_store_id: Any, name: str | None = None) -> Store:
        """Register a store, seed its left collection and write an empty playlist."""
        store_id = normalize_store_id(raw_store_id)
        display_name = (name or "").strip() or store_id
        if len(display_name) > STORE_NAME_MAX_LENGTH:
            raise InvalidInputError(f"store name must be at most {STORE_NAME_MAX_LENGTH} characters")
        created = self.repo.create_store(store_id, name=display_name)
        placeholder = self.layout.placeholder_key(store_id)
        if self.store.head(placeholder) is None:
            self.store.put(placeholder, b"", "text/plain")
        self.playlists.refresh_left(store_id)
        logger.info("store.created", store_id=store_id, name=display_name)
        return created

    def list_stores(self) -> list[dict[str, Any]]:
        stores = self.repo.list_stores()
        statuses = self.status.statuses_for(store.store_id for store in stores)
        return [
            {
                **self._store_dict(store),
                "status": statuses[store.store_id].status.value,
                "lastSeen": statuses[store.store_id].last_seen,
            }
            for store in stores
        ]

    def store_detail(self, raw_store_id: Any) -> dict[str, Any]:
        store = self.repo.get_store(normalize_store_id(raw_store_id))
        return {
            "store": self._store_dict(store),
            "playerUrl": self.player_url(store.store_id),
            "status": self.status.get_status(store.store_id).to_dict(),
        }

    def player_url(self, store_id: str) -> str:
        return f"{self.player_base_url}?store={quote(store_id)}"

    @staticmethod
    def _store_dict(store: Store) -> dict[str, Any]:
        return {
            "storeId": store.store_id,
            "name": store.name,
            "createdAt": store.created_at.isoformat(),
        }
