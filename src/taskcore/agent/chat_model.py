"""Chat-model seam consumed by agents.

taskcore never talks to a provider directly.  Anything that can take a
message list plus an output contract and hand back a decision satisfies
:class:`ChatModel`; :class:`CallableChatModel` adapts a plain function.

Shipped in this module
----------------------
- ChatModel           — structural protocol for model clients
- CallableChatModel   — wraps any sync/async callable as a ChatModel
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from taskcore.messages.models import Message

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatModel(Protocol):
    """Structural protocol for language-model clients.

    ``invoke`` may return an instance of *output_schema*, a mapping, raw
    text, an object with a ``content`` attribute (a raw AI message), or
    ``None`` when the provider produced nothing usable.  Provider errors,
    including authentication failures, are raised unchanged.
    """

    async def invoke(
        self, messages: Sequence[Message], output_schema: type[BaseModel]
    ) -> object:
        ...


class CallableChatModel:
    """Adapts a callable into a :class:`ChatModel`.

    Parameters
    ----------
    fn:
        Sync or async callable taking ``(messages, output_schema)``.
    name:
        Label used in logs and ``repr``.

    Raises
    ------
    TypeError
        If *fn* is not callable.

    Examples
    --------
    >>> import asyncio
    >>> model = CallableChatModel(lambda messages, schema: {"ok": True})
    >>> asyncio.run(model.invoke([], BaseModel))
    {'ok': True}
    """

    def __init__(self, fn: Callable[..., Any], name: str | None = None) -> None:
        if not callable(fn):
            raise TypeError(
                f"CallableChatModel requires a callable; got {type(fn).__name__}."
            )
        self._fn = fn
        self._name = name or getattr(fn, "__name__", type(fn).__name__)

    async def invoke(
        self, messages: Sequence[Message], output_schema: type[BaseModel]
    ) -> object:
        logger.debug(
            "Invoking %s with %d messages for %s",
            self._name,
            len(messages),
            output_schema.__name__,
        )
        result = self._fn(list(messages), output_schema)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"CallableChatModel(name={self._name!r})"
