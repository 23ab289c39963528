"""
Booking use cases: the catalog booking flow and the appointment manager.

Bookings have no id of their own. A booking is addressed by the pair
(``userId``, ``bookedAt``), and a user only ever sees or touches their own
bookings. Nothing prevents two bookings for the same slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from servicedesk.domain.records import Booking, Service, iso_timestamp
from servicedesk.domain.schedule import booking_dates, parse_iso_date, time_slots
from servicedesk.repositories import BOOKINGS_KEY, KeyValueStore, get_store, read_collection, write_collection
from servicedesk.services.identity_service import Identity

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base exception for booking workflow."""


class NotSignedInError(BookingError):
    """Raised when a booking is attempted without a signed-in user."""


class InvalidSlotError(BookingError):
    """Raised when the date/time pair is not one the catalog offers."""


class BookingNotFoundError(BookingError):
    """Raised when no booking of the user matches ``bookedAt``."""


@dataclass(frozen=True)
class BookingForm:
    service_name: str = ""
    date: str = ""
    time: str = ""


def _local_now() -> datetime:
    return datetime.now().astimezone()


class BookingService:
    def __init__(self, store: KeyValueStore | None = None, clock: Callable[[], datetime] = _local_now) -> None:
        self._store = store
        self.clock = clock

    @property
    def store(self) -> KeyValueStore:
        return self._store or get_store()

    # ------------------------- reads -------------------------
    def all_bookings(self) -> list[Booking]:
        return [Booking.from_dict(item) for item in read_collection(self.store, BOOKINGS_KEY)]

    def bookings_for(self, user: Identity | None) -> list[Booking]:
        if user is None:
            return []
        try:
            bookings = self.all_bookings()
        except (OSError, SQLAlchemyError):
            logger.exception("Error fetching bookings")
            return []
        return [booking for booking in bookings if booking.userId == user.id]

    # ------------------------- catalog flow -------------------------
    def offered_slots(self, selected_date: str | None) -> list[str]:
        now = self.clock()
        offered = {d.date for d in booking_dates(now.date())}
        day = parse_iso_date(selected_date)
        if day is None or day not in offered:
            return []
        return time_slots(day, now.replace(tzinfo=None))

    def book_service(self, service: Service, date: str, time: str, user: Identity | None) -> Booking:
        if user is None:
            raise NotSignedInError("Sign in to book a service")
        if not time or time not in self.offered_slots(date):
            raise InvalidSlotError(f"{date} {time} is not an available slot")
        booking = self._new_booking(service.title, parse_iso_date(date).isoformat(), time, user)
        self._append(booking)
        logger.info("Booking confirmed for %s: %s on %s at %s", user.id, service.title, date, time)
        return booking

    # ------------------------- appointment manager -------------------------
    def create_booking(self, form: BookingForm, user: Identity | None) -> Booking:
        if user is None:
            raise NotSignedInError("Sign in to create a booking")
        booking = self._new_booking(form.service_name, form.date, form.time, user)
        self._append(booking)
        logger.info("Booking created for %s", user.id)
        return booking

    def update_booking(self, booked_at: str, form: BookingForm, user: Identity | None) -> Booking:
        if user is None:
            raise NotSignedInError("Sign in to edit a booking")
        with self.store.locked() as store:
            items = read_collection(store, BOOKINGS_KEY)
            updated = None
            for index, item in enumerate(items):
                current = Booking.from_dict(item)
                if current.key() == (user.id, booked_at):
                    updated = Booking(
                        date=form.date,
                        time=form.time,
                        bookedAt=current.bookedAt,
                        serviceName=form.service_name,
                        userId=current.userId,
                        userEmail=user.email,
                        userName=user.display_name,
                    )
                    items[index] = updated.to_dict()
            if updated is None:
                raise BookingNotFoundError(f"No booking at {booked_at}")
            write_collection(store, BOOKINGS_KEY, items)
        logger.info("Booking %s updated for %s", booked_at, user.id)
        return updated

    def delete_booking(self, booked_at: str, user: Identity | None) -> int:
        """Remove the user's bookings made at ``booked_at``; returns how many went."""
        if user is None:
            raise NotSignedInError("Sign in to delete a booking")
        with self.store.locked() as store:
            items = read_collection(store, BOOKINGS_KEY)
            kept = [item for item in items if Booking.from_dict(item).key() != (user.id, booked_at)]
            removed = len(items) - len(kept)
            if removed:
                write_collection(store, BOOKINGS_KEY, kept)
        logger.info("Deleted %d booking(s) at %s for %s", removed, booked_at, user.id)
        return removed

    # ------------------------- helpers -------------------------
    def _new_booking(self, service_name: str, date: str, time: str, user: Identity) -> Booking:
        return Booking(
            date=date,
            time=time,
            bookedAt=iso_timestamp(self.clock()),
            serviceName=service_name,
            userId=user.id,
            userEmail=user.email,
            userName=user.display_name,
        )

    def _append(self, booking: Booking) -> None:
        with self.store.locked() as store:
            items = read_collection(store, BOOKINGS_KEY)
            items.append(booking.to_dict())
            write_collection(store, BOOKINGS_KEY, items)
