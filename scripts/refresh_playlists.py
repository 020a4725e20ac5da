"""Rebuild generated playlists from the object store.

Used after a failed regeneration left a playlist stale, or after objects were
changed outside the API.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from src.signage.config import load_config
from src.signage.playlists.playlist_builder import PlaylistBuilder
from src.signage.playlists.right_meta import RightMetaStore
from src.signage.storage.keys import KeyLayout
from src.signage.storage.object_store import FilesystemObjectStore
from src.signage.stores.stores_repository import StoreRepository


@dataclass(slots=True)
class RefreshSummary:
    stores_refreshed: int
    right_items: int


def perform_refresh(*, store_ids: list[str] | None = None) -> RefreshSummary:
    """Regenerate left playlists (all stores unless ``store_ids``) and the right playlist."""
    config = load_config()
    object_store = FilesystemObjectStore(config.storage_root)
    layout = KeyLayout(root=config.collection_root)
    builder = PlaylistBuilder(
        store=object_store,
        layout=layout,
        meta_store=RightMetaStore(store=object_store, layout=layout),
        public_base_url=config.public_base_url,
        image_duration_seconds=config.image_duration_seconds,
    )
    repo = StoreRepository(config.session_factory)

    targets = store_ids or [store.store_id for store in repo.list_stores()]
    for store_id in targets:
        repo.get_store(store_id)
        builder.refresh_left(store_id)
    right = builder.refresh_right()
    return RefreshSummary(stores_refreshed=len(targets), right_items=len(right["items"]))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate signage playlists.")
    parser.add_argument(
        "--store",
        action="append",
        dest="stores",
        help="Only refresh this store's left playlist (repeatable).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_refresh(store_ids=args.stores)
    except Exception as exc:
        print(f"refresh failed: {exc}", file=sys.stderr)
        return 2

    print(
        f"refresh done, stores={summary.stores_refreshed}, right_items={summary.right_items}",
        file=sys.stdout,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
