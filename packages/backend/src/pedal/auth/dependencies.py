"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current identity from the request's
``Authorization: Bearer <jwt>`` header.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from pedal.auth.jwt import TokenError, verify_token
from pedal.deps import get_stores
from pedal.store import Stores
from pedal.store.errors import NotFoundError


class CurrentIdentity:
    """The authenticated user making the request."""

    def __init__(self, user_id: str):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id!r})"


def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    stores: Stores = Depends(get_stores),
) -> Optional[CurrentIdentity]:
    """Extract current identity (optional — returns None if no auth).

    Learn: This is the "soft" auth dependency. A token that is present
    but invalid is still a 401 — only a *missing* token yields None.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[7:].strip()
    return _authenticate_jwt(token, stores)


def get_current_user(
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if no auth)."""
    if not identity:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def _authenticate_jwt(token: str, stores: Stores) -> CurrentIdentity:
    """Authenticate via JWT token; the user must still exist and be active."""
    try:
        payload = verify_token(token)
    except TokenError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if payload.get("type", "access") != "access":
        raise HTTPException(status_code=401, detail="Not an access token")

    try:
        user = stores.users.get(payload["sub"])
    except NotFoundError:
        user = None
    if user is None or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return CurrentIdentity(user_id=user.id)
