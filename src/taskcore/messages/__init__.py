"""Conversation message package for taskcore."""
from __future__ import annotations

from taskcore.messages.history import MessageHistory, MessageManager
from taskcore.messages.models import (
    ContentPart,
    ImagePart,
    ImageUrl,
    Message,
    MessageRole,
    TextPart,
    strip_images,
)

__all__ = [
    "MessageRole",
    "TextPart",
    "ImageUrl",
    "ImagePart",
    "ContentPart",
    "Message",
    "strip_images",
    "MessageManager",
    "MessageHistory",
]
