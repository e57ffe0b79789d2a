"""
Read-side enrichment of bookings with their owner's details.

Bookings only store ``ownerId``.  ``JoinService`` attaches the owner's
name, e-mail and role to a copy of each booking, looking the owner up
on every call so renamed accounts show up immediately.  A booking whose
owner no longer exists gets placeholder values; enrichment never fails.
"""

from typing import Dict, List

from ..schemas.account import Account
from ..schemas.booking import Booking, EnrichedBooking
from .account_service import AccountService
from .booking_service import BookingService
from .validation import sort_most_recent_first

MISSING_OWNER_NAME = "Usuario no encontrado"
MISSING_OWNER_FIELD = "N/A"


class JoinService:
    """Combine bookings with account data.  Side-effect free."""

    def __init__(self, accounts: AccountService, bookings: BookingService) -> None:
        self.accounts = accounts
        self.bookings = bookings

    @staticmethod
    def _enrich(booking: Booking, owners: Dict[int, Account]) -> EnrichedBooking:
        owner = owners.get(booking.owner_id)
        return EnrichedBooking(
            **booking.model_dump(),
            owner_name=owner.name if owner else MISSING_OWNER_NAME,
            owner_email=owner.email if owner else MISSING_OWNER_FIELD,
            owner_role=owner.role.value if owner else MISSING_OWNER_FIELD,
        )

    def _owners(self) -> Dict[int, Account]:
        return {account.id: account for account in self.accounts.list_all()}

    def enrich_all(self, most_recent_first: bool = False) -> List[EnrichedBooking]:
        bookings = self.bookings.list_all()
        if most_recent_first:
            bookings = sort_most_recent_first(bookings)
        owners = self._owners()
        return [self._enrich(booking, owners) for booking in bookings]

    def enrich_by_owner(self, owner_id: int) -> List[EnrichedBooking]:
        return [b for b in self.enrich_all() if b.owner_id == owner_id]

    def enrich_today(self) -> List[EnrichedBooking]:
        """Today's agenda for the operator dashboard, earliest first."""
        owners = self._owners()
        return [self._enrich(booking, owners) for booking in self.bookings.list_today()]

    def owner_name(self, owner_id: int) -> str:
        owner = self.accounts.find_by_id(owner_id)
        return owner.name if owner else MISSING_OWNER_NAME

    def owner_exists(self, owner_id: int) -> bool:
        return self.accounts.find_by_id(owner_id) is not None
