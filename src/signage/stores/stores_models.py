"""Store domain dataclass and identifier rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..exceptions import InvalidInputError

STORE_ID_MIN_LENGTH = 2
STORE_ID_MAX_LENGTH = 32
STORE_NAME_MAX_LENGTH = 128


@dataclass(slots=True)
class Store:
    store_id: str
    name: str
    created_at: datetime


def sanitize_store_id(value: object) -> str:
    """Lowercase and strip everything outside ``[a-z0-9]``."""
    return re.sub(r"[^a-z0-9]", "", str(value or "").strip().lower())


def normalize_store_id(value: object) -> str:
    """Sanitize ``value`` and enforce the identifier length bounds."""
    store_id = sanitize_store_id(value)
    if not store_id:
        raise InvalidInputError("store is required")
    if not STORE_ID_MIN_LENGTH <= len(store_id) <= STORE_ID_MAX_LENGTH:
        raise InvalidInputError(
            f"store id must be {STORE_ID_MIN_LENGTH}-{STORE_ID_MAX_LENGTH} "
            f"lowercase alphanumeric characters, got {store_id!r}"
        )
    return store_id
