"""Role-specific system prompts.

Prompt authoring belongs to the host application; agents only need
something that yields their system message.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from taskcore.messages.models import Message


@runtime_checkable
class AgentPrompt(Protocol):
    def get_system_message(self) -> Message:
        ...


class StaticPrompt:
    """Prompt backed by a fixed instruction string."""

    def __init__(self, text: str) -> None:
        self._message = Message.system(text)

    def get_system_message(self) -> Message:
        return self._message


PLANNER_INSTRUCTIONS = """\
You are a planning agent that helps break down tasks into smaller steps and \
reason about the current state of a browser session.

Your role is to:
1. Analyze the current state and history.
2. Evaluate progress towards the ultimate goal.
3. Identify potential challenges or roadblocks.
4. Suggest the next high-level steps to take.

If the task can be completed without a browser, set app_task to true and \
answer it directly in next_steps.

RESPONSE FORMAT: respond with a single JSON object with exactly these fields:
{
    "observation": "brief analysis of the current state and what has been done so far",
    "done": "true or false, whether the ultimate task is fully finished",
    "challenges": "potential challenges or roadblocks",
    "next_steps": "2-3 high-level next steps to take, each step on a new line",
    "reasoning": "explanation for the suggested next steps",
    "app_task": "true or false, whether the task can be done without browsing"
}
"""


class PlannerPrompt(StaticPrompt):
    """System prompt for the planner role."""

    def __init__(self, text: str = PLANNER_INSTRUCTIONS) -> None:
        super().__init__(text)
