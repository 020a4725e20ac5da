"""Object key layout shared by uploads, playlists and players.

::

    <root>/<storeId>/left/left_<slot>.<ext>
    <root>/_common/right/right_<slot>.<ext>
    <root>/<storeId>/left/playlist.json
    <root>/_common/right/playlist.json
    <root>/_common/right/meta.json
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

COMMON_OWNER = "_common"
PLACEHOLDER_NAME = ".keep"
PLAYLIST_NAME = "playlist.json"
META_NAME = "meta.json"

VIDEO_EXTENSION = "mp4"
MEDIA_EXTENSIONS = frozenset({"mp4", "png", "webp", "jpg", "jpeg"})
FALLBACK_EXTENSION = "bin"


class Side(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class MediaType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True, slots=True)
class KeyLayout:
    """Build object keys under a single collection root."""

    root: str = "stores"

    def owner(self, side: Side, store_id: str | None = None) -> str:
        if Side(side) is Side.RIGHT:
            return COMMON_OWNER
        if not store_id:
            raise ValueError("left-side keys need a store identifier")
        return store_id

    def prefix(self, side: Side, store_id: str | None = None) -> str:
        side = Side(side)
        return f"{self.root}/{self.owner(side, store_id)}/{side.value}/"

    def media_key(self, side: Side, slot: int, ext: str, store_id: str | None = None) -> str:
        return f"{self.prefix(side, store_id)}{Side(side).value}_{slot}.{ext}"

    def object_key(self, side: Side, file_name: str, store_id: str | None = None) -> str:
        return f"{self.prefix(side, store_id)}{file_name}"

    def playlist_key(self, side: Side, store_id: str | None = None) -> str:
        return f"{self.prefix(side, store_id)}{PLAYLIST_NAME}"

    def placeholder_key(self, store_id: str) -> str:
        return f"{self.prefix(Side.LEFT, store_id)}{PLACEHOLDER_NAME}"

    @property
    def right_meta_key(self) -> str:
        return f"{self.prefix(Side.RIGHT)}{META_NAME}"


def base_name(key: str) -> str:
    return key.rsplit("/", 1)[-1]


def extension_of(key: str) -> str:
    name = base_name(key)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def media_type_for_key(key: str) -> MediaType:
    if extension_of(key) == VIDEO_EXTENSION:
        return MediaType.VIDEO
    return MediaType.IMAGE


def is_media_key(key: str) -> bool:
    """True for playable media; placeholders, JSON documents and ``.bin`` are not."""
    name = base_name(key)
    if name in (PLACEHOLDER_NAME, PLAYLIST_NAME, META_NAME):
        return False
    return extension_of(key) in MEDIA_EXTENSIONS


def extension_for_content_type(content_type: str | None) -> str:
    """Map an upload content type to the stored extension."""
    value = (content_type or "").lower()
    if "mp4" in value:
        return "mp4"
    if "png" in value:
        return "png"
    if "webp" in value:
        return "webp"
    if "jpg" in value or "jpeg" in value:
        return "jpg"
    return FALLBACK_EXTENSION


def slot_number(file_name: str, side: Side) -> int | None:
    """Return ``N`` for ``<side>_<N>.<ext>`` names, ``None`` otherwise."""
    match = re.fullmatch(rf"{Side(side).value}_(\d+)\.[^./]+", file_name)
    if match is None:
        return None
    return int(match.group(1))
