"""
Business logic for accounts.

``AccountService`` keeps the ``accounts`` collection: creation with
format and uniqueness checks, partial updates, deletion with cascade
onto the owner's bookings, lookups and credential authentication.
Every mutation is a full read-modify-write of the collection; a failed
operation writes nothing.
"""

import logging
from typing import List, Optional

from ..core.ids import next_id
from ..core.result import Err, ErrorKind, Ok, Result, invalid, not_found
from ..core.store import ACCOUNTS_KEY, BOOKINGS_KEY, KeyValueStore
from ..schemas.account import (
    Account,
    AccountDeletion,
    AccountRead,
    AccountUpdate,
    Role,
)
from .validation import account_errors, parse_role

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts.

    Parameters
    ----------
    store : KeyValueStore
        Backend holding the ``accounts`` and ``bookings`` blobs.  The
        bookings blob is only touched by ``delete``.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _load(self) -> List[Account]:
        return [Account.model_validate(raw) for raw in self.store.read(ACCOUNTS_KEY) or []]

    @staticmethod
    def _dump(accounts: List[Account]) -> list:
        return [account.model_dump(mode="json") for account in accounts]

    def _save(self, accounts: List[Account]) -> None:
        self.store.write(ACCOUNTS_KEY, self._dump(accounts))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, name: str, email: str, credential: str, role) -> Result[Account]:
        """Create an account.

        Fails with ``ValidationError`` when a field breaks the format
        rules and with ``DuplicateEmail`` when the e-mail is already
        registered.  The returned record carries the credential; callers
        must convert it with ``to_read()`` before exposing it.
        """
        reasons = account_errors(name, email, credential, role)
        if reasons:
            logger.warning("Refused account creation: %s", ", ".join(reasons))
            return invalid(", ".join(reasons))
        accounts = self._load()
        if any(account.email == email for account in accounts):
            logger.warning("Refused account creation: e-mail %s already registered", email)
            return Err(ErrorKind.DUPLICATE_EMAIL, f"E-mail {email} is already registered")
        account = Account(
            id=next_id(a.id for a in accounts),
            name=name,
            email=email,
            credential=credential,
            role=parse_role(role),
        )
        accounts.append(account)
        self._save(accounts)
        logger.info("Created account %s (%s, %s)", account.id, account.email, account.role.value)
        return Ok(account)

    def register_client(self, name: str, email: str, credential: str) -> Result[Account]:
        """Self-registration: same rules as ``create`` with role ``client``."""
        return self.create(name, email, credential, Role.CLIENT)

    def update(self, account_id: int, updates: AccountUpdate) -> Result[Account]:
        """Apply the non-``None`` fields of ``updates`` to an account.

        Fails with ``NotFound`` for an unknown id, ``ValidationError`` for
        a malformed field, ``DuplicateEmail`` when the new e-mail belongs
        to another account and ``Protected`` when the primary
        administrator would lose the administrator role.
        """
        accounts = self._load()
        index = next((i for i, a in enumerate(accounts) if a.id == account_id), None)
        if index is None:
            return not_found("Account", account_id)
        current = accounts[index]

        reasons = account_errors(
            updates.name, updates.email, updates.credential, updates.role, partial=True
        )
        if reasons:
            logger.warning("Refused update of account %s: %s", account_id, ", ".join(reasons))
            return invalid(", ".join(reasons))
        if updates.email is not None and updates.email != current.email:
            if any(a.email == updates.email for a in accounts if a.id != account_id):
                logger.warning("Refused update of account %s: e-mail in use", account_id)
                return Err(ErrorKind.DUPLICATE_EMAIL, f"E-mail {updates.email} is used by another account")
        role = parse_role(updates.role) if updates.role is not None else None
        if current.is_primary and role is not None and role != Role.ADMINISTRATOR:
            return Err(ErrorKind.PROTECTED, "The primary administrator must keep the administrator role")

        changes = {
            "name": updates.name,
            "email": updates.email,
            "credential": updates.credential,
            "role": role,
        }
        updated = current.model_copy(update={k: v for k, v in changes.items() if v is not None})
        accounts[index] = updated
        self._save(accounts)
        changed = sorted(k for k, v in changes.items() if v is not None)
        logger.info("Updated account %s (fields: %s)", account_id, ", ".join(changed) or "none")
        return Ok(updated)

    def delete(self, account_id: int) -> Result[AccountDeletion]:
        """Delete an account and every booking it owns.

        The primary administrator is never deleted (``Protected``).  Both
        collections are written through a single ``write_many`` call.
        """
        accounts = self._load()
        deleted = next((a for a in accounts if a.id == account_id), None)
        if deleted is None:
            return not_found("Account", account_id)
        if deleted.is_primary:
            logger.warning("Refused deletion of the primary administrator")
            return Err(ErrorKind.PROTECTED, "The primary administrator cannot be deleted")

        bookings = self.store.read(BOOKINGS_KEY) or []
        remaining = [raw for raw in bookings if raw.get("ownerId") != account_id]
        self.store.write_many(
            {
                ACCOUNTS_KEY: self._dump([a for a in accounts if a.id != account_id]),
                BOOKINGS_KEY: remaining,
            }
        )
        cascaded = len(bookings) - len(remaining)
        logger.info("Deleted account %s and %s booking(s)", account_id, cascaded)
        return Ok(AccountDeletion(deleted_account=deleted.to_read(), cascaded_count=cascaded))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_by_id(self, account_id: int) -> Optional[Account]:
        return next((a for a in self._load() if a.id == account_id), None)

    def find_by_email(self, email: str) -> Optional[Account]:
        return next((a for a in self._load() if a.email == email), None)

    def list_all(self) -> List[Account]:
        """All accounts in insertion order."""
        return self._load()

    def authenticate(self, email: str, credential: str) -> Optional[AccountRead]:
        """Return the session view of the account matching both values
        exactly, or ``None``."""
        account = next(
            (a for a in self._load() if a.email == email and a.credential == credential),
            None,
        )
        if account is None:
            logger.warning("Failed login for %s", email)
            return None
        logger.info("Login for account %s (%s)", account.id, account.role.value)
        return account.to_read()
