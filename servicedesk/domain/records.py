"""Record shapes kept in the store, with their exact JSON field names."""
from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

UNKNOWN_CATEGORY = "Unknown Category"


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class ServiceCategory:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceCategory":
        return cls(id=_int_or_none(data.get("id")) or 0, name=str(data.get("name") or ""))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Service:
    id: str
    title: str
    description: str
    imageUrl: str
    categoryId: int | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Service":
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            imageUrl=str(data.get("imageUrl") or ""),
            categoryId=_int_or_none(data.get("categoryId")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Booking:
    date: str
    time: str
    bookedAt: str
    serviceName: str
    userId: str
    userEmail: str
    userName: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Booking":
        return cls(**{name: str(data.get(name) or "") for name in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return asdict(self)

    def key(self) -> tuple[str, str]:
        return self.userId, self.bookedAt


def category_name(categories: Iterable[ServiceCategory], category_id: int | None) -> str:
    for category in categories:
        if category.id == category_id:
            return category.name
    return UNKNOWN_CATEGORY


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def next_timestamp_id(existing: Iterable[Any], now: int | None = None) -> int:
    """Millisecond timestamp, bumped past any id already in ``existing``."""
    taken = {_int_or_none(value) for value in existing}
    candidate = now if now is not None else now_ms()
    while candidate in taken:
        candidate += 1
    return candidate


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
