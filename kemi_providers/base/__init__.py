"""
Providers Base Package

Provider-agnostic building blocks used by the Gemini generators:
- Errors: ``ErrorCode`` taxonomy and ``ProviderError`` hierarchy
- Models: conversation messages, images and session snapshots
- DTOs: wire-format request/response models
- Resilience: rotation cursor and the fallback loop
- Streaming: SSE decoding
- Structured: schema descriptors, prompt augmentation and decoding
"""

from .errors import ErrorCode, ProviderError
from .models import ChatMessage, ChatSessionState, ContentPart, ImageData, Role

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ChatMessage",
    "ChatSessionState",
    "ContentPart",
    "ImageData",
    "Role",
]
