"""In-process event bus for taskcore.

The ``EventBus`` lets agents report lifecycle transitions to observers
(typically a UI) without knowing who is listening.  A misbehaving observer
can neither block delivery to its peers nor fail the emitting agent.

Shipped in this module
----------------------
- EventBus     — thread-safe registry with concurrent, exception-safe async
                 dispatch and a sync wrapper
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import threading
import types

from taskcore.bus.subscriber import Subscriber
from taskcore.schema.events import AgentEvent, ExecutionState

logger = logging.getLogger(__name__)

_BUILTIN_METHODS = (types.BuiltinMethodType, types.MethodWrapperType)


def _same_callback(left: Subscriber, right: Subscriber) -> bool:
    """Identity comparison that also recognises re-bound methods.

    ``obj.method`` (and ``some_list.append``) produces a fresh bound-method
    object on every attribute access, so two of them are the same callback
    when they are bound to the identical ``__self__`` and wrap the identical
    ``__func__``.  Built-in methods have no ``__func__`` and are matched by
    ``__name__`` instead.  ``__eq__`` is never consulted.
    """
    if left is right:
        return True
    if inspect.ismethod(left) and inspect.ismethod(right):
        return left.__self__ is right.__self__ and left.__func__ is right.__func__
    if isinstance(left, _BUILTIN_METHODS) and isinstance(right, _BUILTIN_METHODS):
        return left.__self__ is right.__self__ and left.__name__ == right.__name__
    return False


class EventBus:
    """Thread-safe, in-process publish/subscribe event bus keyed by state.

    Each :class:`~taskcore.schema.events.ExecutionState` maps to an ordered
    list of callbacks.  A callback is stored at most once per state;
    insertion order is the order in which callbacks are started.

    Parameters
    ----------
    max_concurrency:
        Maximum number of callbacks in flight for a single :meth:`emit`.
        ``None`` (the default) starts every callback at once.

    Examples
    --------
    >>> import asyncio
    >>> from taskcore.schema.events import Actor, EventData
    >>> bus = EventBus()
    >>> received = []
    >>> bus.subscribe(ExecutionState.STEP_OK, received.append)
    >>> evt = AgentEvent(Actor.PLANNER, ExecutionState.STEP_OK, EventData("t", 1, 10, "done"))
    >>> asyncio.run(bus.emit(evt))
    >>> len(received)
    1
    """

    def __init__(self, max_concurrency: int | None = None) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self._lock = threading.Lock()
        self._subscribers: dict[ExecutionState, list[Subscriber]] = {}
        self._max_concurrency = max_concurrency
        self._pending: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------

    def subscribe(self, state: ExecutionState, callback: Subscriber) -> None:
        """Register *callback* for events whose state is *state*.

        Subscribing the same callback twice for the same state is a no-op.
        """
        with self._lock:
            callbacks = self._subscribers.setdefault(state, [])
            if any(_same_callback(existing, callback) for existing in callbacks):
                return
            callbacks.append(callback)
        logger.debug("Subscribed %r to %s", callback, state.value)

    def unsubscribe(self, state: ExecutionState, callback: Subscriber) -> None:
        """Remove *callback* from *state*; silently ignores unknown pairs."""
        with self._lock:
            callbacks = self._subscribers.get(state)
            if not callbacks:
                return
            remaining = [cb for cb in callbacks if not _same_callback(cb, callback)]
            if len(remaining) == len(callbacks):
                return
            self._subscribers[state] = remaining
        logger.debug("Unsubscribed %r from %s", callback, state.value)

    def clear_subscribers(self, state: ExecutionState) -> None:
        """Drop every callback registered for *state*."""
        with self._lock:
            if state in self._subscribers:
                self._subscribers[state] = []

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    async def emit(self, event: AgentEvent) -> None:
        """Dispatch *event* to every callback registered for ``event.state``.

        Handlers are snapshotted under the lock, which is then released so
        that handlers may themselves call ``subscribe`` or ``emit`` without
        deadlocking.  All handlers run concurrently and are awaited together.
        Handler exceptions are caught and logged; this coroutine never raises
        because of a subscriber.

        Parameters
        ----------
        event:
            The event to dispatch.
        """
        with self._lock:
            handlers = list(self._subscribers.get(event.state, ()))

        if not handlers:
            return

        if self._max_concurrency is None:
            await asyncio.gather(*(self._safe_call(h, event) for h in handlers))
            return

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(handler: Subscriber) -> None:
            async with semaphore:
                await self._safe_call(handler, event)

        await asyncio.gather(*(bounded(h) for h in handlers))

    def emit_sync(self, event: AgentEvent) -> None:
        """Synchronous wrapper around :meth:`emit`.

        Schedules the emit as a task when called inside a running event loop,
        otherwise runs it to completion on a fresh loop.  Scheduled tasks are
        held by the bus until they finish.  Prefer
        :meth:`emit` in async contexts.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None and loop.is_running():
            task = loop.create_task(self.emit(event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        else:
            asyncio.run(self.emit(event))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _safe_call(self, handler: Subscriber, event: AgentEvent) -> None:
        """Invoke *handler* with *event*, absorbing all exceptions.

        Async handlers are awaited; sync handlers are called directly.  Any
        ``Exception`` is logged at ERROR level with its traceback.
        """
        try:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Unhandled exception in event handler %r for %s event from %s (id=%s)",
                handler,
                event.state.value,
                event.actor.value,
                event.event_id,
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def subscriber_count(self, state: ExecutionState | None = None) -> int:
        """Return the number of callbacks for *state*, or across all states."""
        with self._lock:
            if state is not None:
                return len(self._subscribers.get(state, ()))
            return sum(len(v) for v in self._subscribers.values())

    def pending_count(self) -> int:
        """Return the number of :meth:`emit_sync` tasks not yet finished."""
        return len(self._pending)

    def __repr__(self) -> str:
        return (
            f"EventBus(subscribers={self.subscriber_count()}, "
            f"max_concurrency={self._max_concurrency})"
        )
