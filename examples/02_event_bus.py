#!/usr/bin/env python3
"""Example: Event Bus

Shows idempotent subscription, isolated subscriber failures, and bounded
fan-out on the taskcore EventBus.

Usage:
    python examples/02_event_bus.py

Requirements:
    pip install taskcore
"""
from __future__ import annotations

import asyncio
import logging

from taskcore import Actor, AgentEvent, EventBus, EventData, ExecutionState


async def main_async() -> None:
    logging.basicConfig(level=logging.ERROR)

    # Step 1: At most two subscribers in flight per event
    bus = EventBus(max_concurrency=2)

    received: list[AgentEvent] = []

    async def slow_panel(event: AgentEvent) -> None:
        await asyncio.sleep(0.05)
        received.append(event)

    def crashing_panel(event: AgentEvent) -> None:
        raise RuntimeError("panel bug")

    # Step 2: Subscribing twice is a no-op
    bus.subscribe(ExecutionState.TASK_START, slow_panel)
    bus.subscribe(ExecutionState.TASK_START, slow_panel)
    bus.subscribe(ExecutionState.TASK_START, crashing_panel)
    print(f"Subscribers for task.start: {bus.subscriber_count(ExecutionState.TASK_START)}")

    # Step 3: The crash is logged; the emitter carries on
    event = AgentEvent(
        Actor.SYSTEM,
        ExecutionState.TASK_START,
        EventData(task_id="demo", step=0, max_steps=10, details="Task started"),
    )
    await bus.emit(event)
    print(f"Delivered to slow panel: {len(received)}")

    # Step 4: Unsubscribe and emit again
    bus.unsubscribe(ExecutionState.TASK_START, slow_panel)
    await bus.emit(event)
    print(f"Delivered after unsubscribe: {len(received)}")
    print(repr(bus))


def main() -> None:
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
