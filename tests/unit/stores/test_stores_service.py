from __future__ import annotations

import json

import pytest

from src.signage.exceptions import ConflictError, InvalidInputError, NotFoundError
from src.signage.status.status_repository import TvStatusRepository
from src.signage.status.status_service import StatusTracker
from src.signage.stores.stores_models import normalize_store_id
from src.signage.stores.stores_service import StoreService


@pytest.fixture
def service(store_repo, object_store, layout, playlist_builder, session_factory, clock) -> StoreService:
    return StoreService(
        repo=store_repo,
        store=object_store,
        layout=layout,
        playlists=playlist_builder,
        status=StatusTracker(repo=TvStatusRepository(session_factory), clock=clock),
        player_base_url="https://player.example.com",
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("acme", "acme"), ("  ACME-01 ", "acme01"), ("ab", "ab"), ("a" * 32, "a" * 32)],
)
def test_normalize_store_id_accepts(raw: str, expected: str) -> None:
    assert normalize_store_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "a", "!!", "a" * 33, None])
def test_normalize_store_id_rejects(raw) -> None:
    with pytest.raises(InvalidInputError):
        normalize_store_id(raw)


def test_create_store_seeds_placeholder_and_empty_playlist(service, object_store, clock) -> None:
    store = service.create_store("Acme", "Acme Gangnam")

    assert store.store_id == "acme"
    assert store.name == "Acme Gangnam"
    assert object_store.get("stores/acme/left/.keep") == b""
    playlist = json.loads(object_store.get("stores/acme/left/playlist.json"))
    assert playlist == {"updatedAt": clock.now, "items": []}


def test_create_store_defaults_name_and_rejects_duplicates(service) -> None:
    assert service.create_store("beta").name == "beta"

    with pytest.raises(ConflictError):
        service.create_store("BETA")


def test_list_and_detail_include_status(service, clock) -> None:
    service.create_store("acme", "Acme")
    service.create_store("beta", "Beta")
    service.status.record_heartbeat("acme")

    listed = service.list_stores()
    detail = service.store_detail("acme")

    assert [(item["storeId"], item["status"]) for item in listed] == [
        ("acme", "ONLINE"),
        ("beta", "UNKNOWN"),
    ]
    assert detail["playerUrl"] == "https://player.example.com?store=acme"
    assert detail["status"] == {"storeId": "acme", "status": "ONLINE", "lastSeen": clock.now}
    with pytest.raises(NotFoundError):
        service.store_detail("ghost")


def test_create_store_rejects_overlong_name(service, store_repo) -> None:
    with pytest.raises(InvalidInputError):
        service.create_store("acme", "n" * 129)

    assert not store_repo.exists("acme")
    assert service.create_store("acme", "n" * 128).name == "n" * 128
