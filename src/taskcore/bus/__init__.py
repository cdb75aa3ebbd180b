"""Event bus package for taskcore.

Provides the publish/subscribe channel agents use to report lifecycle
transitions as ``AgentEvent`` instances.
"""
from __future__ import annotations

from taskcore.bus.event_bus import EventBus
from taskcore.bus.subscriber import Subscriber

__all__ = [
    "EventBus",
    "Subscriber",
]
