"""Heartbeat recording and read-time status computation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from ..clock import Clock, epoch_ms
from .status_models import StoreStatus, derive_status
from .status_repository import TvStatusRepository

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class StatusTracker:
    """Record heartbeats and derive ONLINE/OFFLINE on every read.

    Nothing is cached: a status is a function of the stored ``last_seen``
    and the current time, so it cannot go stale.
    """

    repo: TvStatusRepository
    ttl_seconds: int = 120
    clock: Clock = field(default=epoch_ms)

    def record_heartbeat(
        self, store_id: str, now: int | None = None, *, device_id: str | None = None
    ) -> int:
        seen_at = self.clock() if now is None else now
        self.repo.upsert(store_id, seen_at, device_id=device_id)
        logger.info("status.heartbeat.recorded", store_id=store_id, device_id=device_id, last_seen=seen_at)
        return seen_at

    def compute_status(
        self, store_id: str, now: int | None = None, ttl_seconds: int | None = None
    ) -> StoreStatus:
        current = self.clock() if now is None else now
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        last_seen = self.repo.last_seen(store_id)
        return StoreStatus(store_id=store_id, status=derive_status(last_seen, current, ttl), last_seen=last_seen)

    def get_status(self, store_id: str) -> StoreStatus:
        return self.compute_status(store_id)

    def statuses_for(self, store_ids: Iterable[str], now: int | None = None) -> dict[str, StoreStatus]:
        ids = list(store_ids)
        current = self.clock() if now is None else now
        seen = self.repo.last_seen_many(ids)
        return {
            store_id: StoreStatus(
                store_id=store_id,
                status=derive_status(seen.get(store_id), current, self.ttl_seconds),
                last_seen=seen.get(store_id),
            )
            for store_id in ids
        }
