from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("SIGNAGE_DATABASE_URL", "sqlite://")
os.environ.setdefault("SIGNAGE_STORAGE_ROOT", tempfile.mkdtemp(prefix="signage-tests-"))

from src.signage.config import AppConfig, SignageSettings, load_config  # noqa: E402
from src.signage.db.db_init import init_db  # noqa: E402
from src.signage.media.media_service import MediaService  # noqa: E402
from src.signage.playlists.playlist_builder import PlaylistBuilder  # noqa: E402
from src.signage.playlists.right_meta import RightMetaStore  # noqa: E402
from src.signage.storage.keys import KeyLayout  # noqa: E402
from src.signage.stores.stores_repository import StoreRepository  # noqa: E402
from tests.mocks.object_store import InMemoryObjectStore  # noqa: E402

PUBLIC_BASE = "https://cdn.example.com"
START_MS = 1_760_000_000_000


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> int:
        self.now += int(seconds * 1000)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_factory(tmp_path: Path):
    engine = create_engine(f"sqlite:///{tmp_path / 'signage.db'}", future=True)
    init_db(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def layout() -> KeyLayout:
    return KeyLayout(root="stores")


@pytest.fixture
def meta_store(object_store, layout) -> RightMetaStore:
    return RightMetaStore(store=object_store, layout=layout)


@pytest.fixture
def playlist_builder(object_store, layout, meta_store, clock) -> PlaylistBuilder:
    return PlaylistBuilder(
        store=object_store,
        layout=layout,
        meta_store=meta_store,
        public_base_url=PUBLIC_BASE,
        image_duration_seconds=10,
        clock=clock,
    )


@pytest.fixture
def store_repo(session_factory) -> StoreRepository:
    return StoreRepository(session_factory)


@pytest.fixture
def media_service(object_store, layout, store_repo, playlist_builder, meta_store) -> MediaService:
    return MediaService(
        store=object_store,
        layout=layout,
        stores=store_repo,
        playlists=playlist_builder,
        meta_store=meta_store,
        max_upload_bytes=1024,
    )


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    settings = SignageSettings(
        database_url=f"sqlite:///{tmp_path / 'app.db'}",
        storage_root=tmp_path / "media",
        public_base_url=PUBLIC_BASE,
        player_base_url="https://player.example.com",
        online_ttl_seconds=120,
        image_duration_seconds=10,
        max_upload_bytes=1024,
    )
    return load_config(settings)
