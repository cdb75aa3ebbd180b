"""Planner agent: decides the next high-level steps of a task."""
from __future__ import annotations

import logging

from taskcore.agent.auth import is_authentication_error
from taskcore.agent.base import AuthErrorPredicate, BaseAgent
from taskcore.agent.chat_model import ChatModel
from taskcore.agent.context import AgentContext
from taskcore.agent.output import AgentOutput
from taskcore.agent.prompts import AgentPrompt, PlannerPrompt
from taskcore.contract.output import PlannerOutput
from taskcore.messages.models import Message, strip_images
from taskcore.schema.errors import ChatModelAuthError, ValidationFailed
from taskcore.schema.events import Actor, ExecutionState

logger = logging.getLogger(__name__)

PLANNER_ID = "planner"


class PlannerAgent(BaseAgent[PlannerOutput]):
    """Reads the task history and proposes what the navigator should do next.

    Every :meth:`execute` emits ``STEP_START`` followed by exactly one of
    ``STEP_OK`` / ``STEP_FAIL``, unless the provider rejects the credentials,
    in which case :class:`ChatModelAuthError` is raised with no terminal
    event.
    """

    def __init__(
        self,
        chat_model: ChatModel,
        context: AgentContext,
        prompt: AgentPrompt | None = None,
        *,
        is_auth_error: AuthErrorPredicate = is_authentication_error,
    ) -> None:
        super().__init__(
            PlannerOutput,
            chat_model,
            context,
            prompt or PlannerPrompt(),
            agent_id=PLANNER_ID,
            is_auth_error=is_auth_error,
        )

    def build_messages(self) -> list[Message]:
        """Assemble the planner's view of the conversation.

        The history's own system message is replaced by the planner's.  When
        the session uses vision but the planner does not, the latest message
        is reduced to its text.  The history itself is never modified.
        """
        history = self.context.message_manager.get_messages()
        if not history:
            raise ValidationFailed("Message history is empty")

        messages = [self.prompt.get_system_message(), *history[1:]]

        options = self.context.options
        if options.use_vision and not options.use_vision_for_planner:
            messages[-1] = strip_images(messages[-1])
        return messages

    async def execute(self) -> AgentOutput[PlannerOutput]:
        await self.context.emit_event(Actor.PLANNER, ExecutionState.STEP_START, "Planning...")
        try:
            messages = self.build_messages()
            decision = await self.invoke(messages)
            if decision is None:
                raise ValidationFailed("Failed to validate planner output")
        except ChatModelAuthError:
            raise
        except ValidationFailed as exc:
            # Contract violations are never credential failures.
            return await self._fail(exc)
        except Exception as exc:
            if self.is_auth_error(exc):
                logger.error("Planner authentication failed: %s", exc)
                raise ChatModelAuthError(
                    "Planner API Authentication failed. Please verify your API key",
                    exc,
                ) from exc
            return await self._fail(exc)

        await self.context.emit_event(Actor.PLANNER, ExecutionState.STEP_OK, decision.next_steps)
        logger.info("Planner step %d done=%s", self.context.n_steps, decision.done)
        return AgentOutput.ok(self.id, decision)

    async def _fail(self, exc: Exception) -> AgentOutput[PlannerOutput]:
        error_message = str(exc)
        logger.warning("Planning failed at step %d: %s", self.context.n_steps, error_message)
        await self.context.emit_event(
            Actor.PLANNER,
            ExecutionState.STEP_FAIL,
            f"Planning failed: {error_message}",
        )
        return AgentOutput.fail(self.id, error_message)
