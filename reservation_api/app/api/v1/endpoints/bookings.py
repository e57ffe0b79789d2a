"""
Booking endpoints for API v1.

Clients create bookings for themselves, list their own bookings and
history, and may cancel their own bookings.  Operators and
administrators see every booking with its owner details, today's
agenda and the per-status counters, and confirm, cancel or reprogram
any booking.  Only administrators delete bookings.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....core.security import get_current_user, has_role, require_roles
from ....schemas.account import Role, SessionUser
from ....schemas.booking import (
    Booking,
    BookingCreate,
    BookingReprogram,
    BookingStatusUpdate,
    EnrichedBooking,
    Reprogramming,
    StatusChange,
    StatusCounts,
)
from ....services.booking_service import BookingService
from ....services.join_service import JoinService
from ..deps import get_booking_service, get_join_service, unwrap

router = APIRouter()

STAFF_ROLES = (Role.ADMINISTRATOR, Role.OPERATOR)

staff_only = require_roles(*STAFF_ROLES)
clients_only = require_roles(Role.CLIENT)
admin_only = require_roles(Role.ADMINISTRATOR)


@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(clients_only),
) -> Booking:
    """Book a date and time for the calling client.  New bookings are
    ``pending`` until an operator confirms them."""
    return unwrap(bookings.create(current_user.id, body.date, body.time))


@router.get("/", response_model=List[EnrichedBooking])
async def list_bookings(
    recent: bool = False,
    join: JoinService = Depends(get_join_service),
    current_user: SessionUser = Depends(staff_only),
) -> List[EnrichedBooking]:
    """All bookings with owner details; ``recent=true`` puts the latest
    date and time first."""
    return join.enrich_all(most_recent_first=recent)


@router.get("/today", response_model=List[EnrichedBooking])
async def list_today_bookings(
    join: JoinService = Depends(get_join_service),
    current_user: SessionUser = Depends(staff_only),
) -> List[EnrichedBooking]:
    return join.enrich_today()


@router.get("/stats", response_model=StatusCounts)
async def booking_stats(
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(staff_only),
) -> StatusCounts:
    return bookings.count_by_status()


@router.get("/mine", response_model=List[EnrichedBooking])
async def list_my_bookings(
    join: JoinService = Depends(get_join_service),
    current_user: SessionUser = Depends(clients_only),
) -> List[EnrichedBooking]:
    return join.enrich_by_owner(current_user.id)


@router.get("/mine/history", response_model=List[Booking])
async def my_booking_history(
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(clients_only),
) -> List[Booking]:
    return bookings.history_by_owner(current_user.id)


@router.patch("/{booking_id}/status", response_model=StatusChange)
async def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(staff_only),
) -> StatusChange:
    return unwrap(bookings.update_status(booking_id, body.status))


@router.post("/{booking_id}/cancel", response_model=StatusChange)
async def cancel_booking(
    booking_id: int,
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(get_current_user),
) -> StatusChange:
    """Cancel a booking.  Clients may only cancel their own."""
    if not has_role(current_user, STAFF_ROLES):
        booking = bookings.find_by_id(booking_id)
        if booking is not None and booking.owner_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return unwrap(bookings.cancel(booking_id))


@router.patch("/{booking_id}/schedule", response_model=Reprogramming)
async def reprogram_booking(
    booking_id: int,
    body: BookingReprogram,
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(staff_only),
) -> Reprogramming:
    """Move a booking to a new date and/or time.  Cancelled bookings
    become pending again."""
    return unwrap(bookings.reprogram(booking_id, body.date, body.time))


@router.delete("/{booking_id}", response_model=Booking)
async def delete_booking(
    booking_id: int,
    bookings: BookingService = Depends(get_booking_service),
    current_user: SessionUser = Depends(admin_only),
) -> Booking:
    return unwrap(bookings.delete(booking_id))
