"""
Authentication endpoints for API v1.

``/login`` exchanges an e-mail and credential for a bearer token plus
the session view of the account; ``/register`` is the public
self-registration that always creates a ``client``.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ....core.security import create_access_token, get_current_user
from ....schemas.account import AccountRead, AccountRegister, LoginRequest, SessionUser, Token
from ....services.account_service import AccountService
from ..deps import get_account_service, unwrap

router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> Token:
    user = accounts.authenticate(body.email, body.credential)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return Token(access_token=create_access_token({"sub": user.email}), user=user)


@router.post("/register", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def register(
    body: AccountRegister,
    accounts: AccountService = Depends(get_account_service),
) -> AccountRead:
    """Create a client account for the caller."""
    account = unwrap(accounts.register_client(body.name, body.email, body.credential))
    return account.to_read()


@router.get("/me", response_model=SessionUser)
async def me(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    return current_user
