"""Append-only conversation history."""

from collections.abc import Iterator

from stratsync.models.schemas import Message


class ConversationStore:
    """Ordered sequence of messages for one chat page.

    Messages are appended in the order replies arrive, which is not
    necessarily the order their queries were sent. Nothing is ever edited
    or removed.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._ids: set[int] = set()

    def append(self, message: Message) -> None:
        if message.id in self._ids:
            raise ValueError(f"Message {message.id} is already in the conversation")
        self._ids.add(message.id)
        self._messages.append(message)

    def all(self) -> tuple[Message, ...]:
        """Return a snapshot of the conversation in display order."""
        return tuple(self._messages)

    @property
    def has_user_messages(self) -> bool:
        return any(message.is_user for message in self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())
