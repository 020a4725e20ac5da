"""Persistence for the one-row-per-store heartbeat table."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from sqlalchemy.orm import Session

from ..db.db_models import TvStatusModel
from ..exceptions import handle_sqlalchemy_errors


class TvStatusRepository:
    """Key-value wrapper over ``tv_status`` (store_id -> last_seen ms)."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def upsert(self, store_id: str, last_seen: int, *, device_id: str | None = None) -> None:
        """Last write wins; no ordering check against the stored value."""
        with handle_sqlalchemy_errors(entity="tv_status"), self._session_factory() as session:
            model = session.get(TvStatusModel, store_id)
            if model is None:
                model = TvStatusModel(store_id=store_id)
            model.last_seen = last_seen
            model.device_id = device_id
            session.add(model)
            session.commit()

    def last_seen(self, store_id: str) -> int | None:
        with handle_sqlalchemy_errors(entity="tv_status"), self._session_factory() as session:
            model = session.get(TvStatusModel, store_id)
            return model.last_seen if model is not None else None

    def last_seen_many(self, store_ids: Iterable[str]) -> dict[str, int]:
        ids = list(store_ids)
        if not ids:
            return {}
        with handle_sqlalchemy_errors(entity="tv_status"), self._session_factory() as session:
            rows = session.query(TvStatusModel).filter(TvStatusModel.store_id.in_(ids)).all()
            return {row.store_id: row.last_seen for row in rows}
