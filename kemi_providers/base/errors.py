"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``kemi_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ConfigurationError,
    FallbackExhausted,
    MalformedResponseError,
    ProviderError,
    StructuredDecodeError,
    TransportError,
    UnsupportedImageError,
)
from .errors_parts.classification import classify_exception, code_for_status

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
