#!/usr/bin/env python3
"""Example: Quickstart

Runs one planner step against a canned model and prints the lifecycle
events a UI would receive.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install taskcore
"""
from __future__ import annotations

import asyncio

import taskcore
from taskcore import (
    AgentContext,
    AgentEvent,
    AgentOptions,
    CallableChatModel,
    EventBus,
    ExecutionState,
    ImagePart,
    ImageUrl,
    Message,
    MessageHistory,
    PlannerAgent,
    TextPart,
)


def canned_model(messages: list[Message], schema: type) -> str:
    # Raw text answers are parsed the same way as structured ones.
    return """```json
{
  "observation": "The search page is open",
  "challenges": "Results may be paginated",
  "reasoning": "Searching is the fastest route",
  "next_steps": "Type the query into the search box",
  "done": "false",
  "app_task": false
}
```"""


async def main_async() -> None:
    print(f"taskcore version: {taskcore.__version__}")

    # Step 1: Wire the bus to a printing subscriber
    bus = EventBus()

    def show(event: AgentEvent) -> None:
        print(f"  [{event.actor.value}] {event.state.value}: {event.details}")

    for state in (ExecutionState.STEP_START, ExecutionState.STEP_OK, ExecutionState.STEP_FAIL):
        bus.subscribe(state, show)

    # Step 2: Build the history; the last message carries a screenshot
    history = MessageHistory(
        [
            Message.system("You are a browser agent."),
            Message.human("Task: find the taskcore docs"),
            Message.human(
                [
                    TextPart(text="Current url: https://search.example"),
                    ImagePart(image_url=ImageUrl(url="data:image/png;base64,AAAA")),
                ]
            ),
        ]
    )

    # Step 3: Vision on for the session, off for the planner
    options = AgentOptions(use_vision=True, use_vision_for_planner=False)
    context = AgentContext(history, bus, options=options)
    planner = PlannerAgent(CallableChatModel(canned_model), context)

    # Step 4: Run one step
    output = await planner.execute()
    if output.result is not None:
        print(f"\nNext steps: {output.result.next_steps} (done={output.result.done})")
    else:
        print(f"\nPlanner failed: {output.error}")


def main() -> None:
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
