"""kemi_providers package

Gemini client with credential and model fallback.

Purpose:
    Provide a minimal, stable API for external consumption (packaging is
    configured via the repository root ``pyproject.toml``). Callers build a
    :class:`FallbackGenerator` for one-shot questions or a
    :class:`ChatGenerator` for conversations; both rotate across every
    configured (model, API key) pair before giving up.

Public API (re-exported):
    - Version: ``__version__``
    - Generators: :class:`FallbackGenerator`, :class:`ChatGenerator`, :class:`ChatSession`
    - Configuration: :class:`GeminiSettings`, :func:`get_gemini_settings`
    - Models: :class:`ChatMessage`, :class:`ChatSessionState`, :class:`ImageData`
    - Structured output: :class:`SchemaDescriptor`, :class:`FieldSpec`
    - Streaming: :class:`StreamDecoder`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and subclasses
"""

from .base.errors import (
    ConfigurationError,
    ErrorCode,
    FallbackExhausted,
    MalformedResponseError,
    ProviderError,
    StructuredDecodeError,
    TransportError,
    UnsupportedImageError,
)
from .base.models import ChatMessage, ChatSessionState, ContentPart, ImageData, Role
from .base.resilience import RotationCursor, advance
from .base.streaming import StreamDecoder
from .base.structured import FieldSpec, SchemaDescriptor
from .config import GeminiSettings, get_gemini_settings
from .gemini import ChatGenerator, ChatSession, FallbackGenerator

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "FallbackGenerator",
    "ChatGenerator",
    "ChatSession",
    "GeminiSettings",
    "get_gemini_settings",
    "ChatMessage",
    "ChatSessionState",
    "ContentPart",
    "ImageData",
    "Role",
    "RotationCursor",
    "advance",
    "StreamDecoder",
    "FieldSpec",
    "SchemaDescriptor",
    "ProviderError",
    "ErrorCode",
    "TransportError",
    "MalformedResponseError",
    "FallbackExhausted",
    "StructuredDecodeError",
    "ConfigurationError",
    "UnsupportedImageError",
]
