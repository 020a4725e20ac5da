"""Database initialization helpers."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from .db_models import Base


def init_db(engine: Engine) -> None:
    """Create the store and tv_status tables when missing."""
    Base.metadata.create_all(engine)
