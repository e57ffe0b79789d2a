"""
Top‑level router for version 1 of the API.

Aggregates the resource routers under a single router that ``main``
mounts at ``/api/v1``.
"""

from fastapi import APIRouter

from .endpoints import accounts, auth, bookings

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
