"""Message manager seam and a list-backed implementation.

Agents only ever read a snapshot of the history.  How it is trimmed or
persisted is up to the host application.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from taskcore.messages.models import Message

logger = logging.getLogger(__name__)


@runtime_checkable
class MessageManager(Protocol):
    """Supplies the ordered conversation history to agents."""

    def get_messages(self) -> Sequence[Message]:
        """Return the history, oldest first.

        The first entry is the durable system/instruction message.
        """
        ...


class MessageHistory:
    """Append-only, in-memory :class:`MessageManager`.

    Parameters
    ----------
    messages:
        Optional initial turns, oldest first.

    Examples
    --------
    >>> history = MessageHistory([Message.system("You are a browser agent.")])
    >>> history.add_message(Message.human("Open example.com"))
    >>> len(history)
    2
    """

    def __init__(self, messages: Sequence[Message] | None = None) -> None:
        self._lock = threading.Lock()
        self._messages: list[Message] = list(messages or ())

    def add_message(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)
        logger.debug("History now holds %d messages", len(self._messages))

    def get_messages(self) -> list[Message]:
        """Return a copy of the history; callers may not mutate the store."""
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageHistory(messages={len(self)})"
