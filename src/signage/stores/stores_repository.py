"""Store repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from ..db.db_models import StoreModel
from ..exceptions import ConflictError, NotFoundError, handle_sqlalchemy_errors
from .stores_models import Store


class StoreRepository:
    """Provide access to the store registry."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_stores(self) -> Sequence[Store]:
        with handle_sqlalchemy_errors(entity="store"), self._session_factory() as session:
            rows = session.query(StoreModel).order_by(StoreModel.store_id).all()
            return [self._to_domain(row) for row in rows]

    def get_store(self, store_id: str) -> Store:
        with handle_sqlalchemy_errors(entity="store"), self._session_factory() as session:
            row = session.get(StoreModel, store_id)
            if row is None:
                raise NotFoundError(f"Store '{store_id}' not found")
            return self._to_domain(row)

    def exists(self, store_id: str) -> bool:
        with handle_sqlalchemy_errors(entity="store"), self._session_factory() as session:
            return session.get(StoreModel, store_id) is not None

    def create_store(self, store_id: str, *, name: str, created_at: datetime | None = None) -> Store:
        """Insert a new store; identifiers are never reused or renamed."""
        with handle_sqlalchemy_errors(entity="store"), self._session_factory() as session:
            if session.get(StoreModel, store_id) is not None:
                raise ConflictError(f"Store '{store_id}' already exists")
            row = StoreModel(
                store_id=store_id,
                name=name,
                created_at=created_at or datetime.utcnow(),
            )
            session.add(row)
            session.commit()
            return self._to_domain(row)

    @staticmethod
    def _to_domain(model: StoreModel) -> Store:
        return Store(store_id=model.store_id, name=model.name, created_at=model.created_at)
