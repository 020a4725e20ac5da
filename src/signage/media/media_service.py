"""Media operations that mutate the object set and regenerate playlists."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import structlog

from ..exceptions import AppError, InvalidInputError, NotFoundError, PayloadTooLargeError
from ..playlists.playlist_builder import PlaylistBuilder
from ..playlists.right_meta import RightItemMeta, RightMetaStore, coerce_duration, normalize_targets
from ..storage.keys import (
    META_NAME,
    PLAYLIST_NAME,
    KeyLayout,
    Side,
    base_name,
    extension_for_content_type,
    media_type_for_key,
    slot_number,
)
from ..storage.object_store import ObjectStore
from ..stores.stores_repository import StoreRepository
from .slot_allocator import next_slot

logger = structlog.get_logger(__name__)

_FILE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")

# Sentinel for "field not supplied" in metadata edits.
UNSET: Any = object()


@dataclass(slots=True)
class UploadResult:
    key: str
    file: str
    slot: int
    side: Side

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "file": self.file, "slot": self.slot, "side": self.side.value}


@dataclass(slots=True)
class MediaService:
    """Upload, delete, list and annotate media.

    Every mutation ends with playlist regeneration. If the regeneration step
    fails the object change is already persisted; the error is propagated and
    the playlist stays stale until the next successful mutation or refresh.
    """

    store: ObjectStore
    layout: KeyLayout
    stores: StoreRepository
    playlists: PlaylistBuilder
    meta_store: RightMetaStore
    max_upload_bytes: int = 500 * 1024 * 1024

    def upload_media(
        self,
        side: Side,
        data: bytes,
        content_type: str | None,
        store_id: str | None = None,
    ) -> UploadResult:
        side = Side(side)
        owner = self._require_owner(side, store_id)
        if not data:
            raise InvalidInputError("file required")
        if len(data) > self.max_upload_bytes:
            raise PayloadTooLargeError(
                f"upload of {len(data)} bytes exceeds limit of {self.max_upload_bytes}"
            )

        slot = next_slot(self.store, self.layout, side, owner)
        ext = extension_for_content_type(content_type)
        key = self.layout.media_key(side, slot, ext, owner)
        self.store.put(key, data, content_type)
        logger.info(
            "media.upload.stored",
            side=side.value,
            store_id=owner,
            key=key,
            size_bytes=len(data),
        )
        self._regenerate(side, owner, trigger="upload", key=key)
        return UploadResult(key=key, file=base_name(key), slot=slot, side=side)

    def delete_media(self, side: Side, file_name: str, store_id: str | None = None) -> str:
        side = Side(side)
        owner = self._require_owner(side, store_id)
        file_name = self._validate_file_name(file_name)
        key = self.layout.object_key(side, file_name, owner)
        if self.store.head(key) is None:
            raise NotFoundError(f"File '{file_name}' not found")
        self.store.delete(key)
        logger.info("media.delete.removed", side=side.value, store_id=owner, key=key)
        self._regenerate(side, owner, trigger="delete", key=key)
        return key

    def list_media(self, side: Side, store_id: str | None = None) -> list[dict[str, Any]]:
        side = Side(side)
        owner = self._require_owner(side, store_id)
        keys = self.playlists.list_media_keys(side, owner)
        meta = self.meta_store.sync(keys) if side is Side.RIGHT else None
        items: list[dict[str, Any]] = []
        for key in keys:
            file = base_name(key)
            item: dict[str, Any] = {
                "key": key,
                "file": file,
                "slot": slot_number(file, side),
                "url": self.playlists.media_url(key),
                "type": media_type_for_key(key).value,
            }
            if meta is not None:
                record = meta.find(file) or RightItemMeta(file=file)
                item["targets"] = list(record.targets)
                item["fullPanel"] = record.full_panel
                item["durationSeconds"] = record.duration_seconds
            items.append(item)
        return items

    def update_right_meta(
        self,
        file: str,
        *,
        targets: Any = None,
        full_panel: bool = False,
        duration_seconds: Any = UNSET,
    ) -> RightItemMeta:
        """Replace targets and full-panel flag of one right-side record.

        ``duration_seconds`` keeps its stored value unless supplied; ``None``
        clears the override.
        """
        file = (file or "").strip()
        if not file:
            raise InvalidInputError("file required")
        keys = self.playlists.list_media_keys(Side.RIGHT)
        document = self.meta_store.sync(keys)
        record = document.find(file)
        if record is None:
            raise NotFoundError(f"File '{file}' not found")

        record.targets = normalize_targets(targets)
        record.full_panel = bool(full_panel)
        if duration_seconds is not UNSET:
            if duration_seconds is not None and coerce_duration(duration_seconds) is None:
                raise InvalidInputError("durationSeconds must be a positive number")
            record.duration_seconds = coerce_duration(duration_seconds)
        self.meta_store.save(document)
        logger.info(
            "right_meta.updated",
            file=file,
            targets=record.targets,
            full_panel=record.full_panel,
            duration_seconds=record.duration_seconds,
        )
        self._regenerate(Side.RIGHT, None, trigger="meta", key=file)
        return record

    def refresh(self, side: Side, store_id: str | None = None) -> dict[str, Any]:
        """Rebuild one playlist on demand."""
        side = Side(side)
        owner = self._require_owner(side, store_id)
        if side is Side.LEFT:
            return self.playlists.refresh_left(owner)
        return self.playlists.refresh_right()

    def _require_owner(self, side: Side, store_id: str | None) -> str | None:
        if side is Side.RIGHT:
            return None
        if not store_id:
            raise InvalidInputError("store is required")
        if not self.stores.exists(store_id):
            raise NotFoundError(f"Store '{store_id}' not found")
        return store_id

    @staticmethod
    def _validate_file_name(file_name: str) -> str:
        name = (file_name or "").strip()
        if not name or not _FILE_NAME.fullmatch(name) or name.startswith("."):
            raise InvalidInputError(f"invalid file name: {file_name!r}")
        if name in (PLAYLIST_NAME, META_NAME):
            raise InvalidInputError(f"{name} is generated and cannot be deleted")
        return name

    def _regenerate(self, side: Side, store_id: str | None, *, trigger: str, key: str) -> None:
        try:
            if side is Side.LEFT:
                self.playlists.refresh_left(store_id or "")
            else:
                self.playlists.refresh_right()
        except AppError:
            logger.error(
                "playlist.regenerate.failed",
                side=side.value,
                store_id=store_id,
                trigger=trigger,
                key=key,
                exc_info=True,
            )
            raise
