"""Conversation message models.

Message content is either plain text or an ordered list of typed parts.
Parts form a tagged union discriminated on ``type`` so a list can carry
text and screenshots side by side, the way chat-completion APIs expect.

All models are frozen Pydantic BaseModels.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Speaker of a conversational turn."""

    SYSTEM = "system"
    HUMAN = "human"
    AI = "ai"
    TOOL = "tool"


class TextPart(BaseModel):
    """A text segment of a multi-part message."""

    model_config = {"frozen": True}

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    """Location of an image; usually a ``data:image/png;base64,...`` URL."""

    model_config = {"frozen": True}

    url: str
    detail: str | None = None


class ImagePart(BaseModel):
    """An image segment of a multi-part message."""

    model_config = {"frozen": True}

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class Message(BaseModel):
    """One conversational turn.

    Attributes
    ----------
    role:
        Who produced the turn.
    content:
        Plain text, or an ordered list of :data:`ContentPart` values.
    """

    model_config = {"frozen": True}

    role: MessageRole
    content: Union[str, list[ContentPart]]

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role=MessageRole.SYSTEM, content=text)

    @classmethod
    def human(cls, content: Union[str, list[ContentPart]]) -> "Message":
        return cls(role=MessageRole.HUMAN, content=content)

    @property
    def is_multipart(self) -> bool:
        return not isinstance(self.content, str)

    def text_content(self) -> str:
        """Return the message text with every non-text part dropped."""
        if isinstance(self.content, str):
            return self.content
        return "".join(part.text for part in self.content if isinstance(part, TextPart))


def strip_images(message: Message) -> Message:
    """Return a text-only version of *message*.

    A multi-part message becomes a human message whose content is its text
    parts concatenated in their original order.  A plain-text message is
    returned unchanged (the same object).
    """
    if not message.is_multipart:
        return message
    return Message.human(message.text_content())
