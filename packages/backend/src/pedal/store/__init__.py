"""In-memory entity stores.

Learn: Each entity type lives in its own store object with its own
reader/writer lock — there is no module-level shared state. The app
factory builds one Stores bundle and hands it to the request handlers
through FastAPI dependencies, so every test can use a fresh, isolated
bundle.
"""

from dataclasses import dataclass, field

from pedal.store.app_config import AppConfigStore
from pedal.store.comments import CommentStore
from pedal.store.follows import FollowStore
from pedal.store.messages import MessageStore
from pedal.store.posts import PostStore
from pedal.store.users import UserStore


@dataclass
class Stores:
    users: UserStore = field(default_factory=UserStore)
    posts: PostStore = field(default_factory=PostStore)
    comments: CommentStore = field(default_factory=CommentStore)
    messages: MessageStore = field(default_factory=MessageStore)
    follows: FollowStore = field(default_factory=FollowStore)
    config: AppConfigStore = field(default_factory=AppConfigStore)

    @classmethod
    def create(cls, seed: bool = False) -> "Stores":
        stores = cls()
        if seed:
            from pedal.store.seed import seed_demo_data

            seed_demo_data(stores)
        return stores
