"""
Pydantic models for bookings.

``Booking`` mirrors one entry of the persisted ``bookings`` blob.  Date
and time stay in their stored text form (``YYYY-MM-DD`` and ``HH:MM``);
the booking service parses them when it needs to compare or sort.
``EnrichedBooking`` is the read-side view produced by the join service.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(BaseModel):
    """A stored booking record."""

    id: int
    owner_id: int = Field(..., alias="ownerId")
    date: str = Field(..., example="2026-02-20")
    time: str = Field(..., example="10:00")
    status: BookingStatus = BookingStatus.PENDING

    model_config = {
        "populate_by_name": True,
    }


class BookingCreate(BaseModel):
    """Body for creating a booking.  The owner is the calling account."""

    date: str = Field(..., example="2026-02-20")
    time: str = Field(..., example="10:00")


class BookingStatusUpdate(BaseModel):
    status: str = Field(..., example="confirmed")


class BookingReprogram(BaseModel):
    """New schedule for a booking; omitted parts keep their value."""

    date: Optional[str] = Field(None, example="2026-02-21")
    time: Optional[str] = Field(None, example="11:00")


class StatusChange(BaseModel):
    booking: Booking
    previous_status: BookingStatus = Field(..., alias="previousStatus")
    new_status: BookingStatus = Field(..., alias="newStatus")

    model_config = {
        "populate_by_name": True,
    }


class Reprogramming(BaseModel):
    """A reprogrammed booking together with the schedule it replaced."""

    booking: Booking
    previous_date: str = Field(..., alias="previousDate")
    previous_time: str = Field(..., alias="previousTime")

    model_config = {
        "populate_by_name": True,
    }


class StatusCounts(BaseModel):
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    cancelled: int = 0


class EnrichedBooking(Booking):
    """A booking with its owner's display fields attached.

    ``owner_role`` is plain text because an orphaned booking carries the
    ``"N/A"`` placeholder instead of a role.
    """

    owner_name: str = Field(..., alias="ownerName")
    owner_email: str = Field(..., alias="ownerEmail")
    owner_role: str = Field(..., alias="ownerRole")
