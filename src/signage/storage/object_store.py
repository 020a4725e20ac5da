"""Object store contract and the filesystem-backed implementation."""

from __future__ import annotations

import json
import logging
import mimetypes
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from ..exceptions import InvalidInputError, ObjectStoreError


@dataclass(slots=True)
class StoredObject:
    key: str
    size: int
    content_type: str
    uploaded_at: datetime


class ObjectStore(Protocol):
    """Flat key/value blob storage addressed by ``/``-separated keys."""

    def put(self, key: str, data: bytes, content_type: str | None = None) -> StoredObject: ...

    def get(self, key: str) -> bytes | None: ...

    def head(self, key: str) -> StoredObject | None: ...

    def delete(self, key: str) -> None: ...

    def list(self, prefix: str) -> list[StoredObject]: ...


def read_json(store: ObjectStore, key: str) -> Any | None:
    """Return the decoded JSON document or ``None`` when absent.

    Undecodable payloads raise :class:`ValueError`; callers decide whether
    that is fatal.
    """
    raw = store.get(key)
    if raw is None:
        return None
    return json.loads(raw.decode("utf-8"))


def write_json(store: ObjectStore, key: str, value: Any) -> StoredObject:
    payload = json.dumps(value, indent=2, ensure_ascii=False).encode("utf-8")
    return store.put(key, payload, "application/json")


def _guess_content_type(key: str) -> str:
    guessed, _ = mimetypes.guess_type(key)
    return guessed or "application/octet-stream"


@dataclass(slots=True)
class FilesystemObjectStore:
    """Store objects as files below ``root``; each key maps to one path."""

    root: Path
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def put(self, key: str, data: bytes, content_type: str | None = None) -> StoredObject:
        path = self._path_for(key)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # whole-object replace, readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
            with os.fdopen(fd, "wb") as sink:
                sink.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            self.log.error("object_store.put_failed", extra={"key": key}, exc_info=exc)
            raise ObjectStoreError(f"put {key} failed: {exc}") from exc
        return StoredObject(
            key=key,
            size=len(data),
            content_type=content_type or _guess_content_type(key),
            uploaded_at=datetime.now(timezone.utc),
        )

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise ObjectStoreError(f"get {key} failed: {exc}") from exc

    def head(self, key: str) -> StoredObject | None:
        path = self._path_for(key)
        try:
            if not path.is_file():
                return None
            return self._describe(key, path)
        except OSError as exc:
            raise ObjectStoreError(f"head {key} failed: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise ObjectStoreError(f"delete {key} failed: {exc}") from exc

    def list(self, prefix: str) -> list[StoredObject]:
        directory = self.root / prefix.rstrip("/") if prefix else self.root
        if not directory.is_dir():
            directory = directory.parent
        if not directory.is_dir():
            return []
        objects: list[StoredObject] = []
        try:
            for path in sorted(directory.rglob("*")):
                if not path.is_file() or path.name.startswith(".upload-"):
                    continue
                key = path.relative_to(self.root).as_posix()
                if key.startswith(prefix):
                    objects.append(self._describe(key, path))
        except OSError as exc:
            raise ObjectStoreError(f"list {prefix} failed: {exc}") from exc
        return objects

    def _path_for(self, key: str) -> Path:
        candidate = PurePosixPath(key)
        if not key or candidate.is_absolute() or ".." in candidate.parts:
            raise InvalidInputError(f"invalid object key: {key!r}")
        return self.root.joinpath(*candidate.parts)

    @staticmethod
    def _describe(key: str, path: Path) -> StoredObject:
        stat = path.stat()
        return StoredObject(
            key=key,
            size=stat.st_size,
            content_type=_guess_content_type(key),
            uploaded_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
