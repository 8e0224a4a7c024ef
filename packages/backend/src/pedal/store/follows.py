"""Follow-edge store — follower identity → set of followed identities.

Follows are directed: A following B says nothing about B following A.
Target existence is checked by SocialService against the user store.
"""

from pedal.store.base import LockedStore


class FollowStore(LockedStore):
    def __init__(self) -> None:
        super().__init__()
        self._following: dict[str, set[str]] = {}

    def follow(self, follower_id: str, target_id: str) -> None:
        with self._writing():
            self._following.setdefault(follower_id, set()).add(target_id)

    def unfollow(self, follower_id: str, target_id: str) -> None:
        """Idempotent — unfollowing someone you don't follow is fine."""
        with self._writing():
            targets = self._following.get(follower_id)
            if targets is not None:
                targets.discard(target_id)

    def following(self, follower_id: str) -> frozenset[str]:
        with self._reading():
            return frozenset(self._following.get(follower_id, ()))

    def followers(self, target_id: str) -> frozenset[str]:
        with self._reading():
            return frozenset(
                follower
                for follower, targets in self._following.items()
                if target_id in targets
            )

    def is_following(self, follower_id: str, target_id: str) -> bool:
        with self._reading():
            return target_id in self._following.get(follower_id, ())
