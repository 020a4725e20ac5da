"""Regenerate the per-store left playlist and the shared right playlist.

Playlists are caches derived purely from the object store plus right-side
metadata. They are rewritten after every mutation and never on read, so a
failed regeneration leaves the previous document in place until the next
successful mutation or an explicit refresh.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..clock import Clock, epoch_ms
from ..config import DEFAULT_IMAGE_DURATION_SECONDS
from ..storage.keys import KeyLayout, MediaType, Side, base_name, is_media_key, media_type_for_key
from ..storage.object_store import ObjectStore, read_json, write_json
from .right_meta import RightMetaDocument, RightMetaStore

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class PlaylistItem:
    url: str
    key: str
    type: MediaType
    duration_seconds: float | None
    file: str | None = None
    targets: list[str] | None = None
    full_panel: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "url": self.url,
            "key": self.key,
            "type": self.type.value,
            "durationSeconds": self.duration_seconds,
        }
        if self.file is not None:
            payload["file"] = self.file
        if self.targets is not None:
            payload["targets"] = list(self.targets)
        if self.full_panel is not None:
            payload["fullPanel"] = self.full_panel
        return payload


def empty_playlist() -> dict[str, Any]:
    return {"updatedAt": None, "items": []}


def _slot_sort_key(key: str) -> tuple[int, int, str]:
    name = base_name(key)
    match = re.match(r"^[a-z]+_(\d+)\.", name)
    if match is None:
        return (1, 0, name)
    return (0, int(match.group(1)), name)


@dataclass(slots=True)
class PlaylistBuilder:
    store: ObjectStore
    layout: KeyLayout
    meta_store: RightMetaStore
    public_base_url: str
    image_duration_seconds: int = DEFAULT_IMAGE_DURATION_SECONDS
    clock: Clock = field(default=epoch_ms)

    def list_media_keys(self, side: Side, store_id: str | None = None) -> list[str]:
        """Playable keys directly under the collection, ascending by slot."""
        prefix = self.layout.prefix(side, store_id)
        keys = [
            obj.key
            for obj in self.store.list(prefix)
            if "/" not in obj.key[len(prefix):] and is_media_key(obj.key)
        ]
        return sorted(keys, key=_slot_sort_key)

    def media_url(self, key: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{key}"

    def default_duration(self, key: str) -> int | None:
        # videos advance on playback end, not on a timer
        if media_type_for_key(key) is MediaType.VIDEO:
            return None
        return self.image_duration_seconds

    def build_left_items(self, store_id: str) -> list[PlaylistItem]:
        return [
            PlaylistItem(
                url=self.media_url(key),
                key=key,
                type=media_type_for_key(key),
                duration_seconds=self.default_duration(key),
            )
            for key in self.list_media_keys(Side.LEFT, store_id)
        ]

    def build_right_items(
        self, keys: list[str], meta: RightMetaDocument
    ) -> list[PlaylistItem]:
        items: list[PlaylistItem] = []
        for key in keys:
            file = base_name(key)
            record = meta.find(file)
            override = record.duration_seconds if record else None
            items.append(
                PlaylistItem(
                    url=self.media_url(key),
                    key=key,
                    type=media_type_for_key(key),
                    duration_seconds=override if override is not None else self.default_duration(key),
                    file=file,
                    targets=list(record.targets) if record else [],
                    full_panel=record.full_panel if record else False,
                )
            )
        return items

    def refresh_left(self, store_id: str) -> dict[str, Any]:
        items = self.build_left_items(store_id)
        document = self._write(self.layout.playlist_key(Side.LEFT, store_id), items)
        logger.info("playlist.left.written", store_id=store_id, items=len(items))
        return document

    def refresh_right(self) -> dict[str, Any]:
        keys = self.list_media_keys(Side.RIGHT)
        meta = self.meta_store.sync(keys)
        items = self.build_right_items(keys, meta)
        document = self._write(self.layout.playlist_key(Side.RIGHT), items)
        logger.info("playlist.right.written", items=len(items))
        return document

    def read_playlist(self, side: Side, store_id: str | None = None) -> dict[str, Any]:
        """Return the stored document; a corrupt or missing one reads as empty."""
        key = self.layout.playlist_key(side, store_id)
        try:
            document = read_json(self.store, key)
        except ValueError:
            logger.warning("playlist.corrupt", key=key)
            return empty_playlist()
        if not isinstance(document, dict) or not isinstance(document.get("items"), list):
            return empty_playlist()
        return document

    def _write(self, key: str, items: list[PlaylistItem]) -> dict[str, Any]:
        document = {"updatedAt": self.clock(), "items": [item.to_dict() for item in items]}
        write_json(self.store, key, document)
        return document
