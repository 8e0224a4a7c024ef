"""Comment store — append-only.

The post id is not validated here; SocialService checks the post store
first (and releases that lock) before adding.
"""

from pedal.store.base import LockedStore
from pedal.store.models import Comment, new_id


class CommentStore(LockedStore):
    def __init__(self) -> None:
        super().__init__()
        self._comments: list[Comment] = []

    def add(self, post_id: str, author_id: str, text: str) -> Comment:
        comment = Comment(
            id=new_id("comment"),
            post_id=post_id,
            author_id=author_id,
            text=text,
        )
        with self._writing():
            self._comments.append(comment)
        return comment.copy()

    def for_post(self, post_id: str) -> list[Comment]:
        """Comments on a post, oldest first."""
        with self._reading():
            return [c.copy() for c in self._comments if c.post_id == post_id]

    def count(self) -> int:
        with self._reading():
            return len(self._comments)
