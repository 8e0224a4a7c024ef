"""User service — registration, login, profiles, search."""

from typing import Optional

import structlog

from pedal.auth.credentials import authenticate
from pedal.auth.password import hash_password
from pedal.store import Stores
from pedal.store.errors import ConflictError, NotFoundError
from pedal.store.models import User

logger = structlog.get_logger()


class UserService:
    def __init__(self, stores: Stores):
        self.stores = stores

    def register(self, name: str, email: str, password: str) -> User:
        """Create an account. Raises ConflictError on a taken email.

        The early lookup only avoids an expensive bcrypt hash for an
        obvious duplicate; the store's create() is the real check.
        """
        if self.stores.users.find_by_email(email) is not None:
            raise ConflictError("User already exists")
        user = self.stores.users.create(
            name=name,
            email=email,
            password_hash=hash_password(password),
        )
        logger.info("user.registered", user_id=user.id)
        return user

    def login(self, email: str, password: str) -> User:
        """Check credentials and stamp last_login. Raises AuthError."""
        user = authenticate(self.stores.users, email, password)
        return self.stores.users.record_login(user.id)

    def get_active(self, user_id: str) -> User:
        """A user visible to others — inactive accounts look missing."""
        user = self.stores.users.get(user_id)
        if not user.is_active:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get(self, user_id: str) -> User:
        return self.stores.users.get(user_id)

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        return self.stores.users.update_profile(user_id, name=name, avatar=avatar)

    def list_active(self) -> list[User]:
        return self.stores.users.list_active()

    def search(self, query: str, limit: int = 10) -> list[User]:
        return self.stores.users.search(query, limit=limit)
