"""
Dependencies shared by the v1 endpoints.

Services are built per request on top of the ``get_store`` dependency,
so overriding ``get_store`` (and ``get_clock``) in tests swaps the
backend for every route at once.  ``unwrap`` converts a service
``Result`` into its value or the matching ``HTTPException``.
"""

from datetime import date
from typing import Dict, TypeVar

from fastapi import Depends, HTTPException, status

from ...core.result import ErrorKind, Result
from ...core.store import KeyValueStore, get_store
from ...services.account_service import AccountService
from ...services.booking_service import BookingService
from ...services.join_service import JoinService
from ...services.validation import Clock

T = TypeVar("T")

# One entry per ErrorKind; tests assert the table is complete.
STATUS_BY_ERROR_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PROTECTED: status.HTTP_403_FORBIDDEN,
}


def unwrap(result: Result[T]) -> T:
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=STATUS_BY_ERROR_KIND[result.kind],
        detail={"kind": result.kind.value, "message": result.message},
    )


def get_clock() -> Clock:
    return date.today


def get_account_service(store: KeyValueStore = Depends(get_store)) -> AccountService:
    return AccountService(store)


def get_booking_service(
    store: KeyValueStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> BookingService:
    return BookingService(store, clock=clock)


def get_join_service(
    accounts: AccountService = Depends(get_account_service),
    bookings: BookingService = Depends(get_booking_service),
) -> JoinService:
    return JoinService(accounts, bookings)
