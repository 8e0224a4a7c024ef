"""Pydantic schemas for posts, reactions, comments and messages."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pedal.schemas.base import ApiModel


# ─── Posts ──────────────────────────────────────────────

class PostCreate(ApiModel):
    text: str = Field(..., max_length=5000)


class PostUpdate(ApiModel):
    text: str = Field(..., max_length=5000)


class PostRead(ApiModel):
    id: str
    author_id: str
    text: str
    created_at: datetime
    reactions: dict[str, str]


class ReactionCreate(ApiModel):
    type: Optional[str] = Field(None, max_length=32)


class ReactionsRead(ApiModel):
    reactions: dict[str, str]


# ─── Comments ───────────────────────────────────────────

class CommentCreate(ApiModel):
    text: str = Field(..., max_length=2000)


class CommentRead(ApiModel):
    id: str
    post_id: str
    author_id: str
    text: str
    created_at: datetime


# ─── Messages ───────────────────────────────────────────

class MessageCreate(ApiModel):
    text: str = Field(..., max_length=2000)


class MessageRead(ApiModel):
    id: str
    text: str
    author_id: str
    created_at: datetime
