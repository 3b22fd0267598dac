"""
Inline image payload model.

``ImageData`` is the provider-agnostic representation of an image sent to the
model: a MIME type plus base64 text. File ingestion only accepts the formats
listed in :data:`IMAGE_MIME_TYPES`; anything else is rejected before any
network call is made.
"""
from __future__ import annotations

import base64
import os
from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict

from ..errors import UnsupportedImageError

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# File extension (lowercase, no dot) -> MIME type.
IMAGE_MIME_TYPES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


def mime_type_for(path: Union[str, os.PathLike]) -> str:
    """Return the MIME type for ``path`` based on its extension.

    Raises:
        UnsupportedImageError: when the extension is not in :data:`IMAGE_MIME_TYPES`.
    """
    extension = Path(path).suffix.lstrip(".").lower()
    try:
        return IMAGE_MIME_TYPES[extension]
    except KeyError:
        raise UnsupportedImageError(extension) from None


class ImageData(BaseModel):
    """A base64-encoded image with its MIME type.

    Attributes:
        mime_type: e.g. ``"image/png"``.
        data: base64 text (no ``data:`` URI prefix).
    """

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: str

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "ImageData":
        """Read an image file; the MIME type is derived from its extension."""
        mime_type = mime_type_for(path)
        raw = Path(path).read_bytes()
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    @classmethod
    def from_path(cls, path: str) -> "ImageData":
        return cls.from_file(path)

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str = DEFAULT_IMAGE_MIME_TYPE) -> "ImageData":
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    @classmethod
    def from_base64(cls, data: str, mime_type: str = DEFAULT_IMAGE_MIME_TYPE) -> "ImageData":
        return cls(mime_type=mime_type, data=data)


__all__ = [
    "ImageData",
    "IMAGE_MIME_TYPES",
    "DEFAULT_IMAGE_MIME_TYPE",
    "mime_type_for",
]
