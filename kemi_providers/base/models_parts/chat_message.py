"""
Chat message model and conversation roles.

Messages are frozen once created: a session appends and removes whole
messages but never edits one in place.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict

from .content_part import ContentPart
from .image_data import ImageData


class Role(str, Enum):
    """Author of a chat message."""

    USER = "USER"
    MODEL = "MODEL"

    @property
    def wire_name(self) -> str:
        """Role name used in request bodies (``"user"`` / ``"model"``)."""
        return self.value.lower()


class ChatMessage(BaseModel):
    """One conversation turn.

    Attributes:
        role: :class:`Role` of the author.
        content: Ordered parts (text and/or inline images).
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: Tuple[ContentPart, ...]

    @classmethod
    def user(cls, text: str, images: Iterable[ImageData] = ()) -> "ChatMessage":
        parts = [ContentPart.of_text(text)]
        parts.extend(ContentPart.of_image(image) for image in images)
        return cls(role=Role.USER, content=tuple(parts))

    @classmethod
    def model(cls, text: str) -> "ChatMessage":
        return cls(role=Role.MODEL, content=(ContentPart.of_text(text),))

    @property
    def text(self) -> str:
        """Concatenated text of all text parts (images are skipped)."""
        return "".join(p.text for p in self.content if p.text is not None)


__all__ = ["ChatMessage", "Role"]
