from __future__ import annotations

from pathlib import Path

import pytest

from src.signage.exceptions import InvalidInputError, ObjectStoreError
from src.signage.storage.object_store import FilesystemObjectStore, read_json, write_json


def test_put_get_head_delete(tmp_path: Path) -> None:
    store = FilesystemObjectStore(tmp_path)

    stored = store.put("stores/acme/left/left_1.png", b"png-bytes", "image/png")

    assert stored.size == 9
    assert (tmp_path / "stores" / "acme" / "left" / "left_1.png").read_bytes() == b"png-bytes"
    assert store.get("stores/acme/left/left_1.png") == b"png-bytes"
    head = store.head("stores/acme/left/left_1.png")
    assert head is not None and head.content_type == "image/png"

    store.delete("stores/acme/left/left_1.png")

    assert store.get("stores/acme/left/left_1.png") is None
    assert store.head("stores/acme/left/left_1.png") is None
    store.delete("stores/acme/left/left_1.png")


def test_put_replaces_whole_object(tmp_path: Path) -> None:
    store = FilesystemObjectStore(tmp_path)
    store.put("a/b.json", b"first version")
    store.put("a/b.json", b"v2")

    assert store.get("a/b.json") == b"v2"
    assert [obj.key for obj in store.list("a/")] == ["a/b.json"]


def test_list_is_limited_to_prefix(tmp_path: Path) -> None:
    store = FilesystemObjectStore(tmp_path)
    store.put("stores/acme/left/left_1.png", b"1")
    store.put("stores/acme/left/left_2.png", b"2")
    store.put("stores/acme2/left/left_1.png", b"3")
    store.put("stores/_common/right/right_1.png", b"4")

    keys = [obj.key for obj in store.list("stores/acme/left/")]

    assert keys == ["stores/acme/left/left_1.png", "stores/acme/left/left_2.png"]
    assert store.list("stores/nobody/left/") == []


@pytest.mark.parametrize("key", ["", "/etc/passwd", "stores/../../secret"])
def test_rejects_keys_escaping_root(tmp_path: Path, key: str) -> None:
    store = FilesystemObjectStore(tmp_path)

    with pytest.raises(InvalidInputError):
        store.put(key, b"x")


def test_os_errors_surface_as_object_store_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "stores"
    blocker.write_bytes(b"not a directory")
    store = FilesystemObjectStore(tmp_path)

    with pytest.raises(ObjectStoreError):
        store.put("stores/acme/left/left_1.png", b"x")


def test_json_helpers(tmp_path: Path) -> None:
    store = FilesystemObjectStore(tmp_path)
    write_json(store, "doc.json", {"items": [1, 2]})

    assert read_json(store, "doc.json") == {"items": [1, 2]}
    assert read_json(store, "missing.json") is None

    store.put("broken.json", b"{not json")
    with pytest.raises(ValueError):
        read_json(store, "broken.json")


def test_failed_put_leaves_no_temp_file(tmp_path: Path) -> None:
    store = FilesystemObjectStore(tmp_path)
    (tmp_path / "a" / "b.png").mkdir(parents=True)

    with pytest.raises(ObjectStoreError):
        store.put("a/b.png", b"png-bytes")

    leftovers = [path.name for path in (tmp_path / "a").iterdir() if path.name.startswith(".upload-")]
    assert leftovers == []
    assert (tmp_path / "a" / "b.png").is_dir()
