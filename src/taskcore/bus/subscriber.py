"""Subscriber protocol for the taskcore event bus."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from taskcore.schema.events import AgentEvent


@runtime_checkable
class Subscriber(Protocol):
    """Structural protocol satisfied by any callable that accepts an event.

    Both sync and async callables are accepted by the event bus.  A
    subscriber that raises is logged and skipped; it is never retried.

    Examples
    --------
    Any function with the right signature automatically satisfies this
    protocol::

        async def show_progress(event: AgentEvent) -> None:
            print(event.actor, event.details)

        assert isinstance(show_progress, Subscriber)
    """

    def __call__(self, event: AgentEvent) -> object:
        """Handle a single agent event.

        Parameters
        ----------
        event:
            The event to handle.  Events are frozen.
        """
        ...
