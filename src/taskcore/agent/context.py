"""Per-task execution context shared by the agents of a session.

The context bundles the collaborators an agent needs (history, event bus,
options) with the current step number, and stamps it together with the
task id onto every event it emits.
"""
from __future__ import annotations

import logging
import uuid

from taskcore.bus.event_bus import EventBus
from taskcore.messages.history import MessageManager
from taskcore.schema.config import AgentOptions, TaskCoreConfig
from taskcore.schema.events import Actor, AgentEvent, EventData, ExecutionState

logger = logging.getLogger(__name__)


class AgentContext:
    """Collaborators and step counter for one task.

    Parameters
    ----------
    message_manager:
        Source of the conversation history.
    event_bus:
        Bus that lifecycle events are emitted on.
    options:
        Session options; defaults to :class:`AgentOptions` defaults.
    task_id:
        Identifier stamped on every event.  Auto-generated when omitted.
    """

    def __init__(
        self,
        message_manager: MessageManager,
        event_bus: EventBus,
        options: AgentOptions | None = None,
        task_id: str | None = None,
    ) -> None:
        self.message_manager = message_manager
        self.event_bus = event_bus
        self.options = options or AgentOptions()
        self.task_id = task_id or str(uuid.uuid4())
        self.n_steps = 1

    @classmethod
    def from_config(
        cls,
        config: TaskCoreConfig,
        message_manager: MessageManager,
        task_id: str | None = None,
    ) -> "AgentContext":
        """Create a context with a fresh :class:`EventBus` sized from *config*."""
        bus = EventBus(max_concurrency=config.event_max_concurrency)
        logger.debug("Created context for session %s", config.session_name)
        return cls(message_manager, bus, options=config.agent, task_id=task_id)

    async def emit_event(self, actor: Actor, state: ExecutionState, details: str) -> None:
        """Build an :class:`AgentEvent` for the current step and emit it."""
        event = AgentEvent(
            actor=actor,
            state=state,
            data=EventData(
                task_id=self.task_id,
                step=self.n_steps,
                max_steps=self.options.max_steps,
                details=details,
            ),
        )
        await self.event_bus.emit(event)

    def __repr__(self) -> str:
        return f"AgentContext(task_id={self.task_id!r}, step={self.n_steps})"
