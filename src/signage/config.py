"""Application configuration builder.

Runtime values come from ``SIGNAGE_*`` environment variables through
:class:`SignageSettings`; :func:`load_config` turns them into an
:class:`AppConfig` holding the live engine and session factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

DEFAULT_ONLINE_TTL_SECONDS = 120
DEFAULT_IMAGE_DURATION_SECONDS = 10


def _default_storage_root() -> Path:
    return Path("./var/media")


class SignageSettings(BaseSettings):
    """Environment-backed settings container."""

    model_config = SettingsConfigDict(env_prefix="SIGNAGE_")

    database_url: str = Field(
        default="sqlite:///signage.db",
        description="SQLAlchemy URL for the store registry and heartbeat table.",
    )
    storage_root: Path = Field(
        default_factory=_default_storage_root,
        description="Filesystem root backing the object store.",
    )
    collection_root: str = Field(
        default="stores",
        min_length=1,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="First segment of every object key.",
    )
    public_base_url: str = Field(
        default="http://localhost:8000/media",
        description="Base URL that serves stored objects to players.",
    )
    player_base_url: str = Field(
        default="http://localhost:8000/player",
        description="Base URL of the TV player page.",
    )
    online_ttl_seconds: int = Field(
        default=DEFAULT_ONLINE_TTL_SECONDS,
        ge=1,
        description="Heartbeat age after which a store is reported OFFLINE.",
    )
    image_duration_seconds: int = Field(
        default=DEFAULT_IMAGE_DURATION_SECONDS,
        ge=1,
        description="Display duration applied to image items without an override.",
    )
    max_upload_bytes: int = Field(
        default=500 * 1024 * 1024,
        ge=1,
        description="Largest accepted upload in bytes.",
    )
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])


@dataclass(slots=True)
class AppConfig:
    storage_root: Path
    collection_root: str
    public_base_url: str
    player_base_url: str
    online_ttl_seconds: int
    image_duration_seconds: int
    max_upload_bytes: int
    cors_allow_origins: list[str]
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]


def _engine_for(database_url: str) -> Engine:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def load_config(settings: SignageSettings | None = None) -> AppConfig:
    """Load configuration from the environment and prepare storage."""
    resolved = settings or SignageSettings()
    storage_root = resolved.storage_root
    storage_root.mkdir(parents=True, exist_ok=True)

    engine = _engine_for(resolved.database_url)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)
    init_db(engine)

    return AppConfig(
        storage_root=storage_root,
        collection_root=resolved.collection_root,
        public_base_url=resolved.public_base_url.rstrip("/"),
        player_base_url=resolved.player_base_url.rstrip("/"),
        online_ttl_seconds=resolved.online_ttl_seconds,
        image_duration_seconds=resolved.image_duration_seconds,
        max_upload_bytes=resolved.max_upload_bytes,
        cors_allow_origins=list(resolved.cors_allow_origins),
        database_url=resolved.database_url,
        engine=engine,
        session_factory=session_factory,
    )
