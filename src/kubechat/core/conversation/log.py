from __future__ import annotations

import itertools
from typing import Iterator

from .schemas import Message, MessageKind, Sender


class ConversationLog:
    """Append-only, ordered transcript of a chat session.

    Ids come from a strictly increasing counter, never from the clock, so two
    messages created within the same instant still get distinct ids. Entries
    are never removed or replaced.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._ids = itertools.count(1)
        self._last_id = 0

    def record(
        self,
        *,
        sender: Sender,
        content: str,
        kind: MessageKind = "plain",
        command_text: str | None = None,
    ) -> Message:
        message = Message(
            id=self._next_id(),
            content=content,
            sender=sender,
            kind=kind,
            command_text=command_text,
        )
        self.append(message)
        return message

    def append(self, message: Message) -> None:
        if message.id <= self._last_id:
            raise ValueError(f"message id {message.id} must be greater than {self._last_id}")
        self._messages.append(message)
        self._last_id = message.id

    def _next_id(self) -> int:
        candidate = next(self._ids)
        # ids of externally built messages may have jumped ahead of the counter
        while candidate <= self._last_id:
            candidate = next(self._ids)
        return candidate

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def since(self, after_id: int | None) -> list[Message]:
        if after_id is None:
            return list(self._messages)
        return [message for message in self._messages if message.id > after_id]

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    @property
    def last_id(self) -> int:
        return self._last_id

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))
