"""
Bearer tokens and the role gate.

Tokens are compact JWTs signed with HMAC‑SHA256 and the application
secret key.  They carry the account e-mail as ``sub`` and an ``exp``
timestamp.  ``get_current_user`` turns a valid token back into the
credential-free session view of a live account, and
``require_roles`` restricts a route to a set of roles.  Storing the
session on the client and redirecting between pages is left to the
client application.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Callable, Dict, Iterable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..schemas.account import Account, Role, SessionUser
from .config import settings
from .store import ACCOUNTS_KEY, KeyValueStore, get_store


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed token with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed, normally ``{"sub": <account e-mail>}``.
    expires_delta : Optional[int]
        Lifetime in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(data)
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify signature and expiry; return the claims or ``None``."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict) or data.get("exp") is None or int(data["exp"]) < int(time.time()):
        return None
    return data


def has_role(user: Optional[SessionUser], allowed_roles: Iterable[Role]) -> bool:
    """Role-set membership check used by the gate."""
    return user is not None and user.role in set(allowed_roles)


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: KeyValueStore = Depends(get_store),
) -> SessionUser:
    """Dependency resolving the bearer token to the session view.

    Raises HTTP 401 when the header is missing, the token is invalid or
    expired, or the account was deleted after the token was issued.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    email = payload.get("sub", "")
    raw = next((a for a in store.read(ACCOUNTS_KEY) or [] if a.get("email") == email), None)
    account = Account.model_validate(raw) if raw else None
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account.to_read()


def require_roles(*roles: Role) -> Callable[[SessionUser], SessionUser]:
    """Dependency factory restricting a route to ``roles``.

    Use it as ``Depends(require_roles(Role.ADMINISTRATOR))``; callers
    with any other role receive HTTP 403.
    """

    def _role_dependency(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if not has_role(current_user, roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _role_dependency
