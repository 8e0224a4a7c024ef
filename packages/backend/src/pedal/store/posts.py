"""Post store — posts with their reaction maps, newest first."""

from datetime import datetime
from typing import Iterable, Optional

from pedal.store.base import LockedStore
from pedal.store.errors import NotFoundError, UnauthorizedError
from pedal.store.models import Post, new_id, utcnow


class PostStore(LockedStore):
    """Posts keyed by id.

    Learn: A dict keeps insertion order, so iterating it backwards is
    the "prepend on create" order the feed needs, while id lookups stay
    O(1). Ids are checked for uniqueness under the write lock.
    """

    def __init__(self) -> None:
        super().__init__()
        self._posts: dict[str, Post] = {}

    # ─── Writes ─────────────────────────────────────────

    def create(
        self,
        author_id: str,
        text: str,
        post_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        reactions: Optional[dict[str, str]] = None,
    ) -> Post:
        with self._writing():
            pid = post_id or new_id("post")
            while pid in self._posts:
                pid = new_id("post")
            post = Post(
                id=pid,
                author_id=author_id,
                text=text,
                created_at=created_at or utcnow(),
                reactions=dict(reactions or {}),
            )
            self._posts[pid] = post
            return post.copy()

    def update_text(self, post_id: str, author_id: str, text: str) -> Post:
        with self._writing():
            post = self._owned_locked(post_id, author_id)
            post.text = text
            return post.copy()

    def delete(self, post_id: str, author_id: str) -> None:
        with self._writing():
            self._owned_locked(post_id, author_id)
            del self._posts[post_id]

    def react(self, post_id: str, user_id: str, kind: str = "like") -> Post:
        """Set ``user_id``'s reaction on a post (one reaction per user)."""
        with self._writing():
            post = self._get_locked(post_id)
            post.reactions[user_id] = kind
            return post.copy()

    # ─── Reads ──────────────────────────────────────────

    def get(self, post_id: str) -> Post:
        with self._reading():
            return self._get_locked(post_id).copy()

    def exists(self, post_id: str) -> bool:
        with self._reading():
            return post_id in self._posts

    def reactions(self, post_id: str) -> dict[str, str]:
        with self._reading():
            return dict(self._get_locked(post_id).reactions)

    def list_all(self) -> list[Post]:
        """All posts, newest first."""
        with self._reading():
            return [p.copy() for p in reversed(self._posts.values())]

    def by_authors(self, author_ids: Iterable[str]) -> list[Post]:
        """Posts written by any of ``author_ids``, newest first."""
        wanted = frozenset(author_ids)
        with self._reading():
            return [
                p.copy()
                for p in reversed(self._posts.values())
                if p.author_id in wanted
            ]

    def count(self) -> int:
        with self._reading():
            return len(self._posts)

    def count_since(self, since: datetime) -> int:
        with self._reading():
            return sum(1 for p in self._posts.values() if p.created_at >= since)

    def _get_locked(self, post_id: str) -> Post:
        try:
            return self._posts[post_id]
        except KeyError:
            raise NotFoundError(f"Post {post_id} not found") from None

    def _owned_locked(self, post_id: str, author_id: str) -> Post:
        post = self._get_locked(post_id)
        if post.author_id != author_id:
            raise UnauthorizedError(f"Post {post_id} belongs to another user")
        return post
