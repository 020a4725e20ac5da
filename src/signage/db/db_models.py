"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative class."""


class StoreModel(Base):
    __tablename__ = "store"

    store_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class TvStatusModel(Base):
    """One row per store: the most recent heartbeat observed."""

    __tablename__ = "tv_status"

    store_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    last_seen: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch ms
    device_id: Mapped[str | None] = mapped_column(String(64))
