"""Social service — posts, reactions, comments, messages, follow graph, feed.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the stores. This makes the
code testable (test services without HTTP) and keeps the locking
rules in one place.

Cross-store operations (feed, comment-add, follow) take one store's
lock, copy what they need, release it, and only then touch the next
store. No code path ever holds two store locks at once, so there is
no lock ordering to get wrong.
"""

from typing import Optional

from pedal.store import Stores
from pedal.store.errors import InvalidInputError, NotFoundError
from pedal.store.models import Comment, Message, Post

DEFAULT_REACTION = "like"


def _require_text(text: Optional[str]) -> str:
    if text is None or not text.strip():
        raise InvalidInputError("Text must not be empty")
    return text


class SocialService:
    """Business logic for the social graph and its content."""

    def __init__(self, stores: Stores):
        self.stores = stores

    # ─── Posts ──────────────────────────────────────────

    def create_post(self, author_id: str, text: str) -> Post:
        return self.stores.posts.create(author_id=author_id, text=_require_text(text))

    def list_posts(self) -> list[Post]:
        return self.stores.posts.list_all()

    def get_post(self, post_id: str) -> Post:
        return self.stores.posts.get(post_id)

    def update_post(self, post_id: str, author_id: str, text: str) -> Post:
        """Edit a post's text. Author only."""
        return self.stores.posts.update_text(post_id, author_id, _require_text(text))

    def delete_post(self, post_id: str, author_id: str) -> None:
        """Delete a post. Author only."""
        self.stores.posts.delete(post_id, author_id)

    def react(self, post_id: str, user_id: str, kind: Optional[str] = None) -> Post:
        return self.stores.posts.react(post_id, user_id, kind or DEFAULT_REACTION)

    def reactions(self, post_id: str) -> dict[str, str]:
        return self.stores.posts.reactions(post_id)

    # ─── Comments ───────────────────────────────────────

    def add_comment(self, post_id: str, author_id: str, text: str) -> Comment:
        """Comment on a post that exists *now*; not re-checked later."""
        text = _require_text(text)
        if not self.stores.posts.exists(post_id):
            raise NotFoundError(f"Post {post_id} not found")
        return self.stores.comments.add(post_id=post_id, author_id=author_id, text=text)

    def comments_for(self, post_id: str) -> list[Comment]:
        return self.stores.comments.for_post(post_id)

    # ─── Messages ───────────────────────────────────────

    def send_message(self, author_id: str, text: str) -> Message:
        return self.stores.messages.append(author_id=author_id, text=_require_text(text))

    def list_messages(self) -> list[Message]:
        return self.stores.messages.list_all()

    # ─── Follow graph ───────────────────────────────────

    def follow(self, follower_id: str, target_id: str) -> None:
        """Follow ``target_id``. NotFound if no such user."""
        if not self.stores.users.exists(target_id):
            raise NotFoundError(f"User {target_id} not found")
        self.stores.follows.follow(follower_id, target_id)

    def unfollow(self, follower_id: str, target_id: str) -> None:
        """Idempotent — always succeeds."""
        self.stores.follows.unfollow(follower_id, target_id)

    def following(self, user_id: str) -> list[str]:
        self._require_user(user_id)
        return sorted(self.stores.follows.following(user_id))

    def followers(self, user_id: str) -> list[str]:
        self._require_user(user_id)
        return sorted(self.stores.follows.followers(user_id))

    def feed(self, user_id: str) -> list[Post]:
        """Posts by ``user_id`` and everyone it follows, newest first.

        Learn: Two separate lock acquisitions — the follow set is copied
        out of the follow store before the post store is read.
        """
        authors = set(self.stores.follows.following(user_id))
        authors.add(user_id)
        return self.stores.posts.by_authors(authors)

    def _require_user(self, user_id: str) -> None:
        if not self.stores.users.exists(user_id):
            raise NotFoundError(f"User {user_id} not found")
