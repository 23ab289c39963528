"""Key-value store interface plus the JSON collection helpers on top of it."""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from servicedesk.core.config import get_settings

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "serviceCategories"
SERVICES_KEY = "services"
BOOKINGS_KEY = "bookingHistory"


class KeyValueStore:
    """String-to-string store with the local-storage surface."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> list[str]:
        raise NotImplementedError

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    @contextmanager
    def locked(self) -> Iterator["KeyValueStore"]:
        """Serialize a read-modify-write cycle within this process."""
        with self._lock:
            yield self


def read_collection(store: KeyValueStore, key: str) -> list[dict]:
    raw = store.get_item(key)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.error("Discarding undecodable JSON stored under %r", key)
        return []
    if not isinstance(data, list):
        logger.error("Expected a list under %r, found %s", key, type(data).__name__)
        return []
    return [item for item in data if isinstance(item, dict)]


def write_collection(store: KeyValueStore, key: str, items: list[dict]) -> None:
    store.set_item(key, json.dumps(items, ensure_ascii=False))


_store: Optional[KeyValueStore] = None
_store_lock = threading.Lock()


def _build_store() -> KeyValueStore:
    settings = get_settings()
    backend = settings.storage_backend
    if backend == "sql":
        from .sql_storage import SQLStore

        return SQLStore()
    if backend == "json":
        from .json_storage import JsonFileStore

        return JsonFileStore(settings.data_file)
    raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r} (expected 'json' or 'sql')")


def get_store() -> KeyValueStore:
    """Return the process-wide store for the configured backend."""
    global _store
    with _store_lock:
        if _store is None:
            _store = _build_store()
            logger.info("Using %s storage backend", type(_store).__name__)
        return _store


def reset_store() -> None:
    global _store
    with _store_lock:
        _store = None
