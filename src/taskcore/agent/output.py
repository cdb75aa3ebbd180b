"""Result envelope returned by ``Agent.execute``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AgentOutput(Generic[T]):
    """Success-or-failure envelope for one agent step.

    Exactly one of ``result`` / ``error`` is set.  Use :meth:`ok` and
    :meth:`fail` rather than the constructor.

    Parameters
    ----------
    id:
        Identifier of the agent that produced the envelope.
    result:
        The validated decision on success.
    error:
        The error message on failure.

    Examples
    --------
    >>> AgentOutput.fail("planner", "timeout").succeeded
    False
    """

    id: str
    result: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("AgentOutput requires exactly one of 'result' or 'error'")

    @classmethod
    def ok(cls, agent_id: str, result: T) -> "AgentOutput[T]":
        return cls(id=agent_id, result=result)

    @classmethod
    def fail(cls, agent_id: str, error: str) -> "AgentOutput[T]":
        return cls(id=agent_id, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None
