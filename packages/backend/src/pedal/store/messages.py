"""Chat message store — append-only."""

from pedal.store.base import LockedStore
from pedal.store.models import Message, new_id


class MessageStore(LockedStore):
    def __init__(self) -> None:
        super().__init__()
        self._messages: list[Message] = []

    def append(self, author_id: str, text: str) -> Message:
        message = Message(id=new_id("msg"), text=text, author_id=author_id)
        with self._writing():
            self._messages.append(message)
        return message.copy()

    def list_all(self) -> list[Message]:
        with self._reading():
            return [m.copy() for m in self._messages]

    def count(self) -> int:
        with self._reading():
            return len(self._messages)
