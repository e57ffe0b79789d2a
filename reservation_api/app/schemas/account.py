"""
Pydantic models for account data.

``Account`` mirrors one entry of the persisted ``accounts`` blob,
credential included.  Everything that leaves the service towards a
session or an HTTP response uses ``AccountRead`` instead, which has no
credential field at all.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

PRIMARY_ADMIN_ID = 1


class Role(str, Enum):
    ADMINISTRATOR = "administrator"
    OPERATOR = "operator"
    CLIENT = "client"


class AccountRead(BaseModel):
    """Credential-free view of an account; also the session view."""

    id: int
    name: str = Field(..., example="Ana Ruiz")
    email: str = Field(..., example="ana@x.com")
    role: Role = Field(..., example="client")

    model_config = {
        "from_attributes": True,
    }


# The authorization gate works on the same shape.
SessionUser = AccountRead


class Account(BaseModel):
    """A stored account record."""

    id: int
    name: str
    email: str
    credential: str
    role: Role

    def to_read(self) -> AccountRead:
        return AccountRead(id=self.id, name=self.name, email=self.email, role=self.role)

    @property
    def is_primary(self) -> bool:
        """The primary administrator is the administrator stored as id 1."""
        return self.id == PRIMARY_ADMIN_ID and self.role == Role.ADMINISTRATOR


class AccountCreate(BaseModel):
    """Body for creating an account (administrators only).

    ``role`` is accepted as free text so that an unknown value reaches
    the service and comes back as an ``invalid role`` validation error
    instead of a schema error.
    """

    name: str = Field(..., example="Ana Ruiz")
    email: str = Field(..., example="ana@x.com")
    credential: str = Field(..., example="secret1")
    role: str = Field(Role.CLIENT.value, example="client")


class AccountRegister(BaseModel):
    """Body for self-registration.  The role is always ``client``."""

    name: str = Field(..., example="Ana Ruiz")
    email: str = Field(..., example="ana@x.com")
    credential: str = Field(..., example="secret1")


class AccountUpdate(BaseModel):
    """Partial update.  Fields left as ``None`` keep their stored value."""

    name: Optional[str] = None
    email: Optional[str] = None
    credential: Optional[str] = None
    role: Optional[str] = None


class AccountDeletion(BaseModel):
    """Outcome of deleting an account together with its bookings."""

    deleted_account: AccountRead = Field(..., alias="deletedAccount")
    cascaded_count: int = Field(..., alias="cascadedCount")

    model_config = {
        "populate_by_name": True,
    }


class LoginRequest(BaseModel):
    email: str = Field(..., example="admin@reservas.com")
    credential: str = Field(..., example="admin123")


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser
