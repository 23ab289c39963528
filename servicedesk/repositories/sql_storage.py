"""Key-value store backed by the ``kv_items`` table."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select

from servicedesk.db.models import KVItem
from servicedesk.db.session import get_session

from .storage import KeyValueStore


class SQLStore(KeyValueStore):
    """CRUD helpers wrapping the SQLAlchemy session."""

    def get_item(self, key: str) -> Optional[str]:
        with get_session() as session:
            entity = session.get(KVItem, key)
            return entity.value if entity else None

    def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.get(KVItem, key)
            if not entity:
                session.add(KVItem(key=key, value=value, updated_at=now))
            else:
                entity.value = value
                entity.updated_at = now
            session.commit()

    def remove_item(self, key: str) -> None:
        with get_session() as session:
            session.execute(delete(KVItem).where(KVItem.key == key))
            session.commit()

    def keys(self) -> list[str]:
        with get_session() as session:
            return list(session.execute(select(KVItem.key).order_by(KVItem.key)).scalars().all())

    def clear(self) -> None:
        with get_session() as session:
            session.execute(delete(KVItem))
            session.commit()
