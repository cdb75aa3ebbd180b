"""Event schema definitions for taskcore.

Every lifecycle transition of a task, step, or action is reported as an
immutable ``AgentEvent``.  Subscribers register against an
``ExecutionState`` on the :class:`~taskcore.bus.event_bus.EventBus`; the
state is the event's type for dispatch purposes.

Shipped in this module
----------------------
- Actor           — identity of the emitting role
- ExecutionState  — closed set of lifecycle states
- EventData       — step counters plus the human-readable detail text
- AgentEvent      — frozen event record with serde helpers
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Actor(str, Enum):
    """Roles that can emit events."""

    SYSTEM = "system"
    USER = "user"
    PLANNER = "planner"
    NAVIGATOR = "navigator"
    VALIDATOR = "validator"


class ExecutionState(str, Enum):
    """Lifecycle states reported on the event bus.

    Using ``str`` as the mixin base means values are valid JSON strings
    without extra serialisation steps.
    """

    TASK_START = "task.start"
    TASK_OK = "task.ok"
    TASK_FAIL = "task.fail"
    TASK_PAUSE = "task.pause"
    TASK_RESUME = "task.resume"
    TASK_CANCEL = "task.cancel"

    STEP_START = "step.start"
    STEP_OK = "step.ok"
    STEP_FAIL = "step.fail"
    STEP_CANCEL = "step.cancel"

    ACT_START = "act.start"
    ACT_OK = "act.ok"
    ACT_FAIL = "act.fail"


@dataclass(frozen=True)
class EventData:
    """Payload carried by every ``AgentEvent``.

    Parameters
    ----------
    task_id:
        Identifier of the task the event belongs to.
    step:
        Step counter of the driving loop when the event was created.
    max_steps:
        Configured step ceiling for the task.
    details:
        Human-readable description of the transition.
    """

    task_id: str
    step: int
    max_steps: int
    details: str


@dataclass(frozen=True)
class AgentEvent:
    """Immutable record of one lifecycle transition.

    Parameters
    ----------
    actor:
        Role that emitted the event.
    state:
        Lifecycle state reached; used as the subscription key.
    data:
        Step counters and detail text.
    timestamp:
        UTC creation time; auto-set to *now* when not provided.
    event_id:
        Unique identifier; auto-generated UUID4 when not provided.

    Examples
    --------
    >>> evt = AgentEvent(
    ...     Actor.PLANNER,
    ...     ExecutionState.STEP_START,
    ...     EventData("task-1", 1, 100, "Planning..."),
    ... )
    >>> evt.details
    'Planning...'
    """

    actor: Actor
    state: ExecutionState
    data: EventData
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def details(self) -> str:
        """Shortcut for ``data.details``."""
        return self.data.details

    def to_dict(self) -> dict[str, object]:
        """Serialise the event to a plain dict suitable for JSON encoding.

        ``timestamp`` is ISO-8601; enum fields are their string values.
        """
        return {
            "event_id": self.event_id,
            "actor": self.actor.value,
            "state": self.state.value,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "task_id": self.data.task_id,
                "step": self.data.step,
                "max_steps": self.data.max_steps,
                "details": self.data.details,
            },
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "AgentEvent":
        """Reconstruct an ``AgentEvent`` from a dict produced by :meth:`to_dict`.

        Raises
        ------
        KeyError
            If ``actor``, ``state`` or ``data`` is missing.
        ValueError
            If ``actor`` or ``state`` is not a recognised enum value.
        """
        raw_ts = payload.get("timestamp")
        if isinstance(raw_ts, str):
            timestamp = datetime.fromisoformat(raw_ts)
        elif isinstance(raw_ts, datetime):
            timestamp = raw_ts
        else:
            timestamp = datetime.now(tz=timezone.utc)

        raw_data = payload["data"]
        data_map: dict[str, object] = dict(raw_data) if isinstance(raw_data, dict) else {}

        event_id_raw = payload.get("event_id")
        return cls(
            actor=Actor(str(payload["actor"])),
            state=ExecutionState(str(payload["state"])),
            data=EventData(
                task_id=str(data_map.get("task_id", "")),
                step=int(data_map.get("step", 0)),  # type: ignore[arg-type]
                max_steps=int(data_map.get("max_steps", 0)),  # type: ignore[arg-type]
                details=str(data_map.get("details", "")),
            ),
            timestamp=timestamp,
            event_id=str(event_id_raw) if event_id_raw is not None else str(uuid.uuid4()),
        )
