"""Bookable dates and half-hour slots offered by the catalog."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

BOOKING_WINDOW_DAYS = 7
FIRST_SLOT_HOUR = 10
LAST_SLOT_HOUR = 14
SLOT_MINUTES = (0, 30)


@dataclass(frozen=True)
class BookingDate:
    date: date
    day_name: str
    day_number: int

    @property
    def iso(self) -> str:
        return self.date.isoformat()


def booking_dates(today: date | None = None) -> list[BookingDate]:
    start = today or date.today()
    dates = []
    for offset in range(BOOKING_WINDOW_DAYS):
        day = start + timedelta(days=offset)
        dates.append(BookingDate(date=day, day_name=day.strftime("%a").upper(), day_number=day.day))
    return dates


def slot_label(hour: int, minutes: int) -> str:
    """12-hour label such as ``10:00 am`` or ``2:30 pm``."""
    display_hour = 12 if hour % 12 == 0 else hour % 12
    suffix = "pm" if hour >= 12 else "am"
    return f"{display_hour}:{minutes:02d} {suffix}"


def time_slots(selected: date | None, now: datetime | None = None) -> list[str]:
    """Slots for ``selected``; on the current day only slots after ``now``."""
    if selected is None:
        return []
    now = now or datetime.now()
    is_today = selected == now.date()
    current = now.hour * 60 + now.minute
    slots = []
    for hour in range(FIRST_SLOT_HOUR, LAST_SLOT_HOUR + 1):
        for minutes in SLOT_MINUTES:
            if is_today and hour * 60 + minutes <= current:
                continue
            slots.append(slot_label(hour, minutes))
    return slots


def parse_iso_date(value: str | None) -> date | None:
    try:
        return date.fromisoformat((value or "").strip())
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """``2025-01-05`` -> ``January 5, 2025``; anything unparsable is returned as given."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return value or ""
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"
