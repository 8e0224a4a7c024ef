"""User store — accounts keyed by identity, with an email index."""

from typing import Optional
from urllib.parse import quote_plus

from pedal.store.base import LockedStore
from pedal.store.errors import ConflictError, NotFoundError
from pedal.store.models import User, new_id, utcnow


def default_avatar(name: str) -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote_plus(name)}"
        "&background=FF6B00&color=fff"
    )


def _email_key(email: str) -> str:
    return email.strip().casefold()


class UserStore(LockedStore):
    """Users by id, plus a casefolded email → id index.

    Learn: The index replaces a linear scan over all users. It is only
    ever touched under the same lock as the users dict, so the two can
    never disagree.
    """

    def __init__(self) -> None:
        super().__init__()
        self._users: dict[str, User] = {}
        self._by_email: dict[str, str] = {}

    # ─── Writes ─────────────────────────────────────────

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        avatar: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> User:
        """Create an account. Raises ConflictError if the email is taken.

        The uniqueness check and the insert share one exclusive
        acquisition, so two concurrent registrations with the same email
        cannot both succeed.
        """
        key = _email_key(email)
        with self._writing():
            if key in self._by_email:
                raise ConflictError(f"Email {email} already registered")
            uid = user_id or new_id("user")
            if uid in self._users:
                raise ConflictError(f"User {uid} already exists")
            now = utcnow()
            user = User(
                id=uid,
                name=name,
                email=email,
                password_hash=password_hash,
                avatar=avatar or default_avatar(name),
                created_at=now,
                last_login=now,
            )
            self._users[uid] = user
            self._by_email[key] = uid
            return user.copy()

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        """Partial profile update — empty values leave the field alone."""
        with self._writing():
            user = self._get_locked(user_id)
            if name:
                user.name = name
            if avatar:
                user.avatar = avatar
            return user.copy()

    def record_login(self, user_id: str) -> User:
        with self._writing():
            user = self._get_locked(user_id)
            user.last_login = utcnow()
            return user.copy()

    def deactivate(self, user_id: str) -> User:
        """Soft delete. Accounts are never removed."""
        with self._writing():
            user = self._get_locked(user_id)
            user.is_active = False
            return user.copy()

    # ─── Reads ──────────────────────────────────────────

    def get(self, user_id: str) -> User:
        with self._reading():
            return self._get_locked(user_id).copy()

    def exists(self, user_id: str) -> bool:
        with self._reading():
            return user_id in self._users

    def find_by_email(self, email: str) -> Optional[User]:
        with self._reading():
            uid = self._by_email.get(_email_key(email))
            return self._users[uid].copy() if uid else None

    def list_active(self) -> list[User]:
        with self._reading():
            return [u.copy() for u in self._users.values() if u.is_active]

    def search(self, query: str, limit: int = 10) -> list[User]:
        """Active users whose name or email contains ``query`` (any case)."""
        needle = query.casefold()
        results: list[User] = []
        with self._reading():
            for user in self._users.values():
                if not user.is_active:
                    continue
                if (
                    not needle
                    or needle in user.name.casefold()
                    or needle in user.email.casefold()
                ):
                    results.append(user.copy())
                    if len(results) >= limit:
                        break
        return results

    def count(self) -> int:
        with self._reading():
            return len(self._users)

    def count_active(self) -> int:
        with self._reading():
            return sum(1 for u in self._users.values() if u.is_active)

    def _get_locked(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError(f"User {user_id} not found") from None
