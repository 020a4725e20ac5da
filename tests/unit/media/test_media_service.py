from __future__ import annotations

import json

import pytest

from src.signage.exceptions import (
    InvalidInputError,
    NotFoundError,
    ObjectStoreError,
    PayloadTooLargeError,
)
from src.signage.media.media_service import MediaService
from src.signage.playlists.playlist_builder import PlaylistBuilder
from src.signage.playlists.right_meta import RightMetaStore
from src.signage.storage.keys import Side
from tests.mocks.object_store import FailingPutStore


def _playlist(object_store, key: str) -> dict:
    return json.loads(object_store.get(key))


@pytest.fixture
def acme(store_repo):
    return store_repo.create_store("acme", name="Acme")


def test_left_upload_stores_object_and_regenerates_playlist(media_service, object_store, acme) -> None:
    result = media_service.upload_media(Side.LEFT, b"img", "image/png", "acme")

    assert result.key == "stores/acme/left/left_1.png"
    assert result.file == "left_1.png"
    assert object_store.get(result.key) == b"img"
    playlist = _playlist(object_store, "stores/acme/left/playlist.json")
    assert [item["key"] for item in playlist["items"]] == [result.key]


def test_left_upload_requires_known_store(media_service) -> None:
    with pytest.raises(NotFoundError):
        media_service.upload_media(Side.LEFT, b"img", "image/png", "ghost")
    with pytest.raises(InvalidInputError):
        media_service.upload_media(Side.LEFT, b"img", "image/png", None)


def test_upload_rejects_empty_and_oversized_payloads(media_service, acme) -> None:
    with pytest.raises(InvalidInputError):
        media_service.upload_media(Side.LEFT, b"", "image/png", "acme")
    with pytest.raises(PayloadTooLargeError):
        media_service.upload_media(Side.LEFT, b"x" * 1025, "image/png", "acme")


def test_unknown_content_type_is_stored_but_not_played(media_service, object_store, acme) -> None:
    stored = media_service.upload_media(Side.LEFT, b"???", "application/pdf", "acme")
    image = media_service.upload_media(Side.LEFT, b"img", "image/jpeg", "acme")

    assert stored.key.endswith("left_1.bin")
    assert image.key.endswith("left_2.jpg")
    playlist = _playlist(object_store, "stores/acme/left/playlist.json")
    assert [item["key"] for item in playlist["items"]] == [image.key]


def test_right_upload_gets_default_metadata(media_service, meta_store) -> None:
    media_service.upload_media(Side.RIGHT, b"img", "image/webp")

    record = meta_store.load().find("right_1.webp")
    assert record is not None
    assert record.targets == []
    assert record.full_panel is False
    assert record.duration_seconds is None


def test_delete_left_removes_item_from_playlist(media_service, object_store, acme) -> None:
    first = media_service.upload_media(Side.LEFT, b"a", "image/png", "acme")
    second = media_service.upload_media(Side.LEFT, b"b", "video/mp4", "acme")

    media_service.delete_media(Side.LEFT, first.file, "acme")

    assert object_store.get(first.key) is None
    playlist = _playlist(object_store, "stores/acme/left/playlist.json")
    assert [item["key"] for item in playlist["items"]] == [second.key]


def test_delete_right_drops_metadata_record(media_service, meta_store) -> None:
    media_service.upload_media(Side.RIGHT, b"a", "image/png")
    media_service.upload_media(Side.RIGHT, b"b", "image/png")

    media_service.delete_media(Side.RIGHT, "right_1.png")

    assert [item.file for item in meta_store.load().items] == ["right_2.png"]


def test_delete_validates_names_and_existence(media_service, acme) -> None:
    with pytest.raises(NotFoundError):
        media_service.delete_media(Side.LEFT, "left_9.png", "acme")
    for bad in ("../left_1.png", ".keep", "playlist.json", "meta.json", ""):
        with pytest.raises(InvalidInputError):
            media_service.delete_media(Side.LEFT, bad, "acme")


def test_list_media_reports_slots_and_right_metadata(media_service, acme) -> None:
    media_service.upload_media(Side.LEFT, b"a", "image/png", "acme")
    media_service.upload_media(Side.RIGHT, b"b", "video/mp4")
    media_service.update_right_meta("right_1.mp4", targets=["acme"], full_panel=True)

    left = media_service.list_media(Side.LEFT, "acme")
    right = media_service.list_media(Side.RIGHT)

    assert left == [
        {
            "key": "stores/acme/left/left_1.png",
            "file": "left_1.png",
            "slot": 1,
            "url": "https://cdn.example.com/stores/acme/left/left_1.png",
            "type": "image",
        }
    ]
    assert right[0]["type"] == "video"
    assert right[0]["targets"] == ["acme"]
    assert right[0]["fullPanel"] is True
    assert right[0]["durationSeconds"] is None


def test_update_right_meta_rejects_unknown_file(media_service) -> None:
    with pytest.raises(NotFoundError):
        media_service.update_right_meta("right_1.png", targets=["acme"])
    with pytest.raises(InvalidInputError):
        media_service.update_right_meta("  ")


def test_update_right_meta_duration_keep_set_clear(media_service, meta_store) -> None:
    media_service.upload_media(Side.RIGHT, b"a", "image/png")

    media_service.update_right_meta("right_1.png", targets="acme, beta", duration_seconds=25)
    assert meta_store.load().find("right_1.png").duration_seconds == 25

    media_service.update_right_meta("right_1.png", targets=["acme"])
    record = meta_store.load().find("right_1.png")
    assert record.duration_seconds == 25
    assert record.targets == ["acme"]

    media_service.update_right_meta("right_1.png", targets=[], duration_seconds=None)
    assert meta_store.load().find("right_1.png").duration_seconds is None

    with pytest.raises(InvalidInputError):
        media_service.update_right_meta("right_1.png", duration_seconds=-3)


def test_regeneration_failure_leaves_object_stored_and_playlist_stale(
    layout, store_repo, clock
) -> None:
    """Known consistency gap: the upload persists while the playlist write fails."""
    store = FailingPutStore("playlist.json")
    meta_store = RightMetaStore(store=store, layout=layout)
    builder = PlaylistBuilder(
        store=store,
        layout=layout,
        meta_store=meta_store,
        public_base_url="https://cdn.example.com",
        clock=clock,
    )
    service = MediaService(
        store=store, layout=layout, stores=store_repo, playlists=builder, meta_store=meta_store
    )
    store_repo.create_store("acme", name="Acme")

    with pytest.raises(ObjectStoreError, match="bucket unavailable"):
        service.upload_media(Side.LEFT, b"img", "image/png", "acme")

    assert store.get("stores/acme/left/left_1.png") == b"img"
    assert builder.read_playlist(Side.LEFT, "acme")["items"] == []

    store.failing_suffixes = ()
    refreshed = service.refresh(Side.LEFT, "acme")

    assert [item["key"] for item in refreshed["items"]] == ["stores/acme/left/left_1.png"]


def test_upload_result_serializes_location_fields(media_service, acme) -> None:
    result = media_service.upload_media(Side.LEFT, b"img", "image/png", "acme")

    assert result.to_dict() == {
        "key": "stores/acme/left/left_1.png",
        "file": "left_1.png",
        "slot": 1,
        "side": "left",
    }
