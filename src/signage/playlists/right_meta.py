"""Per-file metadata for the shared right-side collection.

The document lives at ``<root>/_common/right/meta.json``::

    {"items": [{"file": "right_1.png", "targets": ["acme"], "fullPanel": false,
                "durationSeconds": 15}]}

Reconciliation keeps exactly one record per right-side object: new objects
get default records, records of vanished objects are dropped and records of
surviving objects are carried over untouched. Like slot allocation it is an
unlocked read-modify-write; concurrent editors can lose each other's writes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..storage.keys import KeyLayout, base_name
from ..storage.object_store import ObjectStore, read_json, write_json
from ..stores.stores_models import sanitize_store_id

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class RightItemMeta:
    file: str
    targets: list[str] = field(default_factory=list)
    full_panel: bool = False
    duration_seconds: float | None = None

    def shows_on(self, store_id: str) -> bool:
        return targets_include(self.targets, store_id)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "file": self.file,
            "targets": list(self.targets),
            "fullPanel": self.full_panel,
        }
        if self.duration_seconds is not None:
            payload["durationSeconds"] = self.duration_seconds
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RightItemMeta":
        duration = raw.get("durationSeconds", raw.get("durationSec"))
        return cls(
            file=str(raw.get("file") or "").strip(),
            targets=normalize_targets(raw.get("targets")),
            full_panel=bool(raw.get("fullPanel")),
            duration_seconds=coerce_duration(duration),
        )


@dataclass(slots=True)
class RightMetaDocument:
    items: list[RightItemMeta] = field(default_factory=list)

    def find(self, file: str) -> RightItemMeta | None:
        return next((item for item in self.items if item.file == file), None)

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}


def targets_include(targets: Iterable[str] | None, store_id: str) -> bool:
    """Empty targets mean every store."""
    wanted = list(targets or ())
    return not wanted or store_id in wanted


def normalize_targets(value: Any) -> list[str]:
    """Accept a list or comma separated string; drop blanks and repeats."""
    if not value:
        return []
    if isinstance(value, str):
        raw_items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        raw_items = value
    else:
        return []
    targets: list[str] = []
    for raw in raw_items:
        target = sanitize_store_id(raw)
        if target and target not in targets:
            targets.append(target)
    return targets


def coerce_duration(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return int(value) if float(value).is_integer() else float(value)


def parse_right_meta(raw: Any) -> RightMetaDocument:
    """Build a document from decoded JSON, discarding malformed entries."""
    if not isinstance(raw, dict) or not isinstance(raw.get("items"), list):
        return RightMetaDocument()
    items = [
        RightItemMeta.from_dict(entry)
        for entry in raw["items"]
        if isinstance(entry, dict)
    ]
    return RightMetaDocument(items=[item for item in items if item.file])


def reconcile_right_meta(document: RightMetaDocument, keys: Iterable[str]) -> RightMetaDocument:
    """Return a document with one record per key, sorted by file name."""
    files = {base_name(key) for key in keys}
    by_file: dict[str, RightItemMeta] = {}
    for item in document.items:
        if item.file in files and item.file not in by_file:
            by_file[item.file] = item
    for file in files:
        by_file.setdefault(file, RightItemMeta(file=file))
    return RightMetaDocument(items=[by_file[file] for file in sorted(by_file)])


@dataclass(slots=True)
class RightMetaStore:
    """Load, reconcile and persist the right-side metadata document."""

    store: ObjectStore
    layout: KeyLayout

    def load(self) -> RightMetaDocument:
        key = self.layout.right_meta_key
        try:
            raw = read_json(self.store, key)
        except ValueError:
            logger.warning("right_meta.corrupt", key=key)
            return RightMetaDocument()
        if raw is None:
            return RightMetaDocument()
        return parse_right_meta(raw)

    def save(self, document: RightMetaDocument) -> None:
        write_json(self.store, self.layout.right_meta_key, document.to_dict())

    def sync(self, keys: Iterable[str]) -> RightMetaDocument:
        """Reconcile against the current right-side keys and persist."""
        current = list(keys)
        document = reconcile_right_meta(self.load(), current)
        self.save(document)
        logger.info("right_meta.synced", items=len(document.items))
        return document
