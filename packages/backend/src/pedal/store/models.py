"""In-memory entity records.

Plain dataclasses — the stores own the live instances and hand out
copies, so mutating a returned record never touches shared state.
"""

import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Random id like ``post_1f3a9c0d2b4e6f70``."""
    return f"{prefix}_{secrets.token_hex(8)}"


@dataclass
class User:
    id: str
    name: str
    email: str
    password_hash: str
    avatar: str
    created_at: datetime = field(default_factory=utcnow)
    last_login: datetime = field(default_factory=utcnow)
    is_active: bool = True

    def copy(self) -> "User":
        return replace(self)


@dataclass
class Post:
    id: str
    author_id: str
    text: str
    created_at: datetime = field(default_factory=utcnow)
    reactions: dict[str, str] = field(default_factory=dict)  # user id -> kind

    def copy(self) -> "Post":
        return replace(self, reactions=dict(self.reactions))


@dataclass
class Comment:
    id: str
    post_id: str
    author_id: str
    text: str
    created_at: datetime = field(default_factory=utcnow)

    def copy(self) -> "Comment":
        return replace(self)


@dataclass
class Message:
    id: str
    text: str
    author_id: str
    created_at: datetime = field(default_factory=utcnow)

    def copy(self) -> "Message":
        return replace(self)


@dataclass
class AppConfig:
    app_name: str
    version: str
    max_users: int
    rate_limit: int
    maintenance_mode: bool = False
    features: dict[str, bool] = field(default_factory=dict)

    def copy(self) -> "AppConfig":
        return replace(self, features=dict(self.features))
