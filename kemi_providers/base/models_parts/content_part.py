"""
Content part model for chat messages.

A ``ContentPart`` is either a text segment or an inline image. Exactly one of
the two fields is set; the validator enforces it so a part can always be
mapped to a single wire part.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .image_data import ImageData


class ContentPart(BaseModel):
    """A single piece of message content.

    Attributes:
        text: Text content for text parts.
        image: Inline image for image parts.
    """

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    image: Optional[ImageData] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "ContentPart":
        if (self.text is None) == (self.image is None):
            raise ValueError("content part must carry exactly one of text or image")
        return self

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def of_image(cls, image: ImageData) -> "ContentPart":
        return cls(image=image)

    @property
    def is_text(self) -> bool:
        return self.text is not None


__all__ = ["ContentPart"]
