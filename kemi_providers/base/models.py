"""
Domain models public surface.

Re-exports the one-model-per-file implementations under
``kemi_providers.base.models_parts``.
"""

from .models_parts.image_data import DEFAULT_IMAGE_MIME_TYPE, IMAGE_MIME_TYPES, ImageData, mime_type_for
from .models_parts.content_part import ContentPart
from .models_parts.chat_message import ChatMessage, Role
from .models_parts.chat_session_state import ChatSessionState

__all__ = [
    "ImageData",
    "IMAGE_MIME_TYPES",
    "DEFAULT_IMAGE_MIME_TYPE",
    "mime_type_for",
    "ContentPart",
    "ChatMessage",
    "Role",
    "ChatSessionState",
]
