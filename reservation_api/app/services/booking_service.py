"""
Business logic for bookings.

The ``BookingService`` creates bookings (always ``pending``), changes
their status, reprograms their date and time, deletes them and answers
the listing queries used by the dashboards: per owner, an owner's
history, today's agenda and per-status counts.

Date and business-hour rules are only checked when a booking is created
or reprogrammed; stored bookings are never revalidated as days pass.
The owner of a new booking is not checked against the accounts
collection.  Orphaned bookings are tolerated by the join service.
"""

import logging
from datetime import date
from typing import List, Optional

from ..core.ids import next_id
from ..core.result import Ok, Result, invalid, not_found
from ..core.store import BOOKINGS_KEY, KeyValueStore
from ..schemas.booking import (
    Booking,
    BookingStatus,
    Reprogramming,
    StatusChange,
    StatusCounts,
)
from .validation import (
    Clock,
    check_booking_date,
    check_booking_time,
    sort_most_recent_first,
)

logger = logging.getLogger(__name__)


class BookingService:
    """Service for managing bookings.

    Parameters
    ----------
    store : KeyValueStore
        Backend holding the ``bookings`` blob.
    clock : Clock
        Returns the current local day; defaults to ``date.today``.
    """

    def __init__(self, store: KeyValueStore, clock: Clock = date.today) -> None:
        self.store = store
        self.clock = clock

    def _load(self) -> List[Booking]:
        return [Booking.model_validate(raw) for raw in self.store.read(BOOKINGS_KEY) or []]

    def _save(self, bookings: List[Booking]) -> None:
        self.store.write(BOOKINGS_KEY, [b.model_dump(mode="json", by_alias=True) for b in bookings])

    @staticmethod
    def _index_of(bookings: List[Booking], booking_id: int) -> Optional[int]:
        return next((i for i, b in enumerate(bookings) if b.id == booking_id), None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, owner_id: int, booking_date: str, booking_time: str) -> Result[Booking]:
        """Create a ``pending`` booking for ``owner_id``.

        Fails with ``ValidationError`` when the date is malformed or
        before today, or when the hour is outside 08–20.
        """
        reason = check_booking_date(booking_date, self.clock()) or check_booking_time(booking_time)
        if reason:
            logger.warning("Refused booking for account %s on %s %s: %s", owner_id, booking_date, booking_time, reason)
            return invalid(reason)
        bookings = self._load()
        booking = Booking(
            id=next_id(b.id for b in bookings),
            owner_id=owner_id,
            date=booking_date,
            time=booking_time,
            status=BookingStatus.PENDING,
        )
        bookings.append(booking)
        self._save(bookings)
        logger.info("Created booking %s for account %s on %s %s", booking.id, owner_id, booking_date, booking_time)
        return Ok(booking)

    def update_status(self, booking_id: int, new_status) -> Result[StatusChange]:
        """Overwrite the status of a booking.

        Any status may replace any other.  The result carries the
        previous status so callers can describe the transition.
        """
        try:
            status = BookingStatus(new_status)
        except ValueError:
            return invalid("invalid status")
        bookings = self._load()
        index = self._index_of(bookings, booking_id)
        if index is None:
            return not_found("Booking", booking_id)
        previous = bookings[index].status
        bookings[index] = bookings[index].model_copy(update={"status": status})
        self._save(bookings)
        logger.info("Booking %s: %s -> %s", booking_id, previous.value, status.value)
        return Ok(StatusChange(booking=bookings[index], previous_status=previous, new_status=status))

    def confirm(self, booking_id: int) -> Result[StatusChange]:
        return self.update_status(booking_id, BookingStatus.CONFIRMED)

    def cancel(self, booking_id: int) -> Result[StatusChange]:
        return self.update_status(booking_id, BookingStatus.CANCELLED)

    def reprogram(
        self,
        booking_id: int,
        new_date: Optional[str] = None,
        new_time: Optional[str] = None,
    ) -> Result[Reprogramming]:
        """Move a booking to a new date and/or time.

        Supplied values go through the same checks as on creation.  A
        cancelled booking becomes ``pending`` again; any other status is
        kept.
        """
        bookings = self._load()
        index = self._index_of(bookings, booking_id)
        if index is None:
            return not_found("Booking", booking_id)
        if new_date is not None:
            reason = check_booking_date(new_date, self.clock())
            if reason:
                return invalid(reason)
        if new_time is not None:
            reason = check_booking_time(new_time)
            if reason:
                return invalid(reason)

        current = bookings[index]
        changes = {}
        if new_date is not None:
            changes["date"] = new_date
        if new_time is not None:
            changes["time"] = new_time
        if current.status == BookingStatus.CANCELLED:
            changes["status"] = BookingStatus.PENDING
        bookings[index] = current.model_copy(update=changes)
        self._save(bookings)
        logger.info(
            "Reprogrammed booking %s: %s %s -> %s %s",
            booking_id, current.date, current.time, bookings[index].date, bookings[index].time,
        )
        return Ok(
            Reprogramming(
                booking=bookings[index],
                previous_date=current.date,
                previous_time=current.time,
            )
        )

    def delete(self, booking_id: int) -> Result[Booking]:
        bookings = self._load()
        index = self._index_of(bookings, booking_id)
        if index is None:
            return not_found("Booking", booking_id)
        removed = bookings.pop(index)
        self._save(bookings)
        logger.info("Deleted booking %s", booking_id)
        return Ok(removed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        return next((b for b in self._load() if b.id == booking_id), None)

    def list_all(self) -> List[Booking]:
        return self._load()

    def list_by_owner(self, owner_id: int) -> List[Booking]:
        return [b for b in self._load() if b.owner_id == owner_id]

    def history_by_owner(self, owner_id: int) -> List[Booking]:
        """The owner's bookings, most recent date and time first."""
        return sort_most_recent_first(self.list_by_owner(owner_id))

    def list_today(self) -> List[Booking]:
        """Bookings for the current day, earliest time first."""
        today = self.clock().isoformat()
        return sorted((b for b in self._load() if b.date == today), key=lambda b: b.time)

    def count_by_status(self) -> StatusCounts:
        counts = {status.value: 0 for status in BookingStatus}
        bookings = self._load()
        for booking in bookings:
            counts[booking.status.value] += 1
        return StatusCounts(total=len(bookings), **counts)
