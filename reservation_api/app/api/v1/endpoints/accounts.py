"""
Account management endpoints for API v1.

Restricted to administrators.  Responses never include credentials.
Deleting an account also deletes its bookings; the response reports how
many went with it.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....core.security import require_roles
from ....schemas.account import (
    AccountCreate,
    AccountDeletion,
    AccountRead,
    AccountUpdate,
    Role,
    SessionUser,
)
from ....services.account_service import AccountService
from ..deps import get_account_service, unwrap

router = APIRouter()

admin_only = require_roles(Role.ADMINISTRATOR)


@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def create_account(
    body: AccountCreate,
    accounts: AccountService = Depends(get_account_service),
    current_user: SessionUser = Depends(admin_only),
) -> AccountRead:
    account = unwrap(accounts.create(body.name, body.email, body.credential, body.role))
    return account.to_read()


@router.get("/", response_model=List[AccountRead])
async def list_accounts(
    accounts: AccountService = Depends(get_account_service),
    current_user: SessionUser = Depends(admin_only),
) -> List[AccountRead]:
    return [account.to_read() for account in accounts.list_all()]


@router.get("/{account_id}", response_model=AccountRead)
async def get_account(
    account_id: int,
    accounts: AccountService = Depends(get_account_service),
    current_user: SessionUser = Depends(admin_only),
) -> AccountRead:
    account = accounts.find_by_id(account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return account.to_read()


@router.patch("/{account_id}", response_model=AccountRead)
async def update_account(
    account_id: int,
    body: AccountUpdate,
    accounts: AccountService = Depends(get_account_service),
    current_user: SessionUser = Depends(admin_only),
) -> AccountRead:
    """Change any of name, e-mail, credential and role; omitted fields
    are kept."""
    return unwrap(accounts.update(account_id, body)).to_read()


@router.delete("/{account_id}", response_model=AccountDeletion)
async def delete_account(
    account_id: int,
    accounts: AccountService = Depends(get_account_service),
    current_user: SessionUser = Depends(admin_only),
) -> AccountDeletion:
    """Delete an account and its bookings.

    The primary administrator cannot be deleted, and neither can the
    calling account.
    """
    if current_user.id == account_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    return unwrap(accounts.delete(account_id))
