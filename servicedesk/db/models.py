"""SQLAlchemy models mirroring the JSON file store."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base


class KVItem(Base):
    """One key of the key-value store; ``value`` holds the JSON text as-is."""

    __tablename__ = "kv_items"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
