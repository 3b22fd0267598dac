"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `kemi_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ConfigurationError,
    FallbackExhausted,
    MalformedResponseError,
    ProviderError,
    StructuredDecodeError,
    TransportError,
    UnsupportedImageError,
)
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "MalformedResponseError",
    "FallbackExhausted",
    "StructuredDecodeError",
    "ConfigurationError",
    "UnsupportedImageError",
    "classify_exception",
    "code_for_status",
]
