"""Next-slot computation for ``<side>_<N>.<ext>`` object names.

Allocation is a read-then-write sequence without a lock: two uploads to the
same (store, side) running at the same moment can both observe the same
maximum and write the same key, in which case the later write replaces the
earlier object. Uploads are human-triggered, so this is accepted.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..storage.keys import KeyLayout, Side, base_name, slot_number
from ..storage.object_store import ObjectStore


def next_slot_from_keys(keys: Iterable[str], side: Side) -> int:
    """Return ``max(N) + 1`` over well-formed names, ``1`` when there are none."""
    highest = 0
    for key in keys:
        number = slot_number(base_name(key), side)
        if number is not None and number > highest:
            highest = number
    return highest + 1


def next_slot(
    store: ObjectStore,
    layout: KeyLayout,
    side: Side,
    store_id: str | None = None,
) -> int:
    prefix = layout.prefix(side, store_id)
    # every object counts, including ``.bin`` uploads that never reach a playlist
    keys = [obj.key for obj in store.list(prefix) if "/" not in obj.key[len(prefix):]]
    return next_slot_from_keys(keys, Side(side))
