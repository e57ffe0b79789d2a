"""
Validation and ordering helpers shared by the account and booking
services.

Every ``check_*`` function returns ``None`` when the value is
acceptable and the human-readable reason otherwise; the services wrap
reasons into ``ValidationError`` results.
"""

import re
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional

from ..schemas.account import Role
from ..schemas.booking import Booking

# A clock returns "today" in local time.  Booking validation receives one
# so that tests can pin the current day.
Clock = Callable[[], date]

MIN_NAME_LENGTH = 3
MIN_CREDENTIAL_LENGTH = 6
OPENING_HOUR = 8
CLOSING_HOUR = 20

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
TIME_RE = re.compile(r"(\d{2}):(\d{2})", re.ASCII)


def check_name(name: Optional[str]) -> Optional[str]:
    if not name or len(name.strip()) < MIN_NAME_LENGTH:
        return "name too short"
    return None


def check_email(email: Optional[str]) -> Optional[str]:
    if not email or not EMAIL_RE.fullmatch(email):
        return "invalid email"
    return None


def check_credential(credential: Optional[str]) -> Optional[str]:
    if not credential or len(credential) < MIN_CREDENTIAL_LENGTH:
        return "credential too short"
    return None


def parse_role(role) -> Optional[Role]:
    """Return the ``Role`` for ``role`` (member or value), else ``None``."""
    try:
        return Role(role)
    except ValueError:
        return None


def check_role(role) -> Optional[str]:
    if parse_role(role) is None:
        return "invalid role"
    return None


def account_errors(
    name: Optional[str] = None,
    email: Optional[str] = None,
    credential: Optional[str] = None,
    role=None,
    *,
    partial: bool = False,
) -> List[str]:
    """Collect the reasons why account fields are invalid.

    With ``partial=True`` (updates) fields passed as ``None`` are
    skipped; otherwise every field is required.
    """
    checks = (
        (name, check_name),
        (email, check_email),
        (credential, check_credential),
        (role, check_role),
    )
    reasons = []
    for value, check in checks:
        if partial and value is None:
            continue
        reason = check(value)
        if reason:
            reasons.append(reason)
    return reasons


def parse_date(value: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string; ``None`` if it is not a calendar date.

    ``strptime`` also accepts unpadded fields such as ``2026-3-10``; only
    the zero-padded form is stored, so anything else is refused.
    """
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None
    if parsed.isoformat() != value:
        return None
    return parsed


def parse_hour(value: str) -> Optional[int]:
    """Return the hour of a well-formed ``HH:MM`` string, else ``None``."""
    match = TIME_RE.fullmatch(value or "")
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour


def check_booking_date(value: str, today: date) -> Optional[str]:
    """Today or any later day is accepted."""
    parsed = parse_date(value)
    if parsed is None:
        return "invalid date"
    if parsed < today:
        return "past date"
    return None


def check_booking_time(value: str) -> Optional[str]:
    """Only the hour is constrained: 08:00 through 20:59 are accepted."""
    hour = parse_hour(value)
    if hour is None:
        return "invalid time"
    if not OPENING_HOUR <= hour <= CLOSING_HOUR:
        return "out of hours"
    return None


def booking_instant(booking: Booking) -> datetime:
    return datetime.strptime(f"{booking.date} {booking.time}", "%Y-%m-%d %H:%M")


def sort_most_recent_first(bookings: Iterable[Booking]) -> List[Booking]:
    """Order bookings by date and time, latest first.  Equal instants keep
    their stored order."""
    return sorted(bookings, key=booking_instant, reverse=True)
