"""Object storage abstraction and key layout."""

from .keys import KeyLayout, Side
from .object_store import FilesystemObjectStore, ObjectStore, StoredObject

__all__ = ["FilesystemObjectStore", "KeyLayout", "ObjectStore", "Side", "StoredObject"]
