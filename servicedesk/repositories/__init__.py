"""
Persistence adapters.

The app keeps its three collections in a key-value store (JSON file or SQL
table). Services go through ``read_collection``/``write_collection`` rather
than touching the backend directly.
"""

from .storage import (
    BOOKINGS_KEY,
    CATEGORIES_KEY,
    SERVICES_KEY,
    KeyValueStore,
    get_store,
    read_collection,
    reset_store,
    write_collection,
)

__all__ = [
    "BOOKINGS_KEY",
    "CATEGORIES_KEY",
    "SERVICES_KEY",
    "KeyValueStore",
    "get_store",
    "read_collection",
    "reset_store",
    "write_collection",
]
