"""
Result values returned by every mutating repository operation.

Domain failures are not raised.  A service returns either ``Ok(value)``
or ``Err(kind, message)``; both expose ``ok`` so callers can branch on
it, and the HTTP layer turns an ``Err`` into a response with the status
registered for its kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    DUPLICATE_EMAIL = "DuplicateEmail"
    VALIDATION_ERROR = "ValidationError"
    PROTECTED = "Protected"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    ok: bool = field(default=False, init=False)


Result = Union[Ok[T], Err]


def not_found(what: str, object_id: int) -> Err:
    return Err(ErrorKind.NOT_FOUND, f"{what} {object_id} not found")


def invalid(reason: str) -> Err:
    return Err(ErrorKind.VALIDATION_ERROR, reason)
