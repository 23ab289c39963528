"""
JSON file persistence adapter.

The whole store is one JSON object mapping each key to its string value,
the same shape browser local storage has.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class CorruptStoreError(OSError):
    """Raised when a write would overwrite a data file that cannot be parsed."""


class JsonFileStore(KeyValueStore):
    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__()
        self.path = Path(path)

    def load(self, strict: bool = False) -> dict:
        """Read the whole store.

        An unreadable file reads as empty, unless ``strict`` is set: writers
        load strictly so they never save over data they could not parse.
        """
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            if strict:
                raise CorruptStoreError(f"Data file {self.path} is not a JSON object; refusing to overwrite it")
            logger.error("Data file %s is not a JSON object; reading it as empty", self.path)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def save(self, db: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(db, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self.load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            db = self.load(strict=True)
            db[key] = value
            self.save(db)

    def remove_item(self, key: str) -> None:
        with self._lock:
            db = self.load(strict=True)
            if db.pop(key, None) is not None:
                self.save(db)

    def keys(self) -> list[str]:
        return list(self.load().keys())

    def clear(self) -> None:
        with self._lock:
            self.save({})
