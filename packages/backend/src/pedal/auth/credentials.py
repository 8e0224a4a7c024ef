"""Credential check — email + password → user."""

from pedal.auth.password import verify_password
from pedal.store.models import User
from pedal.store.users import UserStore


class AuthError(Exception):
    """Raised when credentials don't match an active account."""


def authenticate(users: UserStore, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches.

    Unknown email, wrong password and deactivated accounts all raise the
    same AuthError, so callers can't tell which one happened.
    """
    user = users.find_by_email(email)
    if user is None or not user.password_hash or not user.is_active:
        raise AuthError("Invalid credentials")
    if not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")
    return user
