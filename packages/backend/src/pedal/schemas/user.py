"""Pydantic schemas for accounts and auth.

Learn: Separate "Request" schemas (input) from "Read" schemas (output).
UserRead has no password field, so a hash can never leak into a
response even though the store record carries one.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pedal.schemas.base import ApiModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ─── Auth ───────────────────────────────────────────────

class RegisterRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)


class LoginRequest(ApiModel):
    email: str
    password: str


class RefreshRequest(ApiModel):
    refresh_token: str


class UserSummary(ApiModel):
    id: str
    name: str
    email: str
    avatar: str


class TokenResponse(ApiModel):
    token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(TokenResponse):
    user: UserSummary


# ─── Users ──────────────────────────────────────────────

class UserRead(ApiModel):
    id: str
    name: str
    email: str
    avatar: str
    created_at: datetime
    last_login: datetime
    is_active: bool


class ProfileUpdate(ApiModel):
    name: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = None


class UserSearchResult(ApiModel):
    users: list[UserRead]
    count: int


class UserIdList(ApiModel):
    users: list[str]
    count: int
