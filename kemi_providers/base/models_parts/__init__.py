"""Domain model parts (one model per module); import via ``kemi_providers.base.models``."""

from .image_data import DEFAULT_IMAGE_MIME_TYPE, IMAGE_MIME_TYPES, ImageData, mime_type_for
from .content_part import ContentPart
from .chat_message import ChatMessage, Role
from .chat_session_state import ChatSessionState

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
