"""
Structured provider error exception types.

``ProviderError`` wraps failures with a normalized `ErrorCode`. The subclasses
below name the failure categories the request engine reacts to:

- ``TransportError``: network or HTTP-level failure; rotated past.
- ``MalformedResponseError``: a 2xx response without candidate text; rotated
  past like a transport failure.
- ``FallbackExhausted``: every (model, credential) pair failed for one call.
- ``StructuredDecodeError``: model text could not be decoded into the
  requested type; never retried.
- ``ConfigurationError``: no credentials or no models.
- ``UnsupportedImageError``: an image file extension outside the accepted set.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode

PROVIDER_NAME = "gemini"


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated.
        model: Optional model name associated with the failure.
        retryable: Hint for the fallback loop (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = PROVIDER_NAME
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class TransportError(ProviderError):
    """Network or HTTP-level failure surfaced by a transport."""

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.TRANSIENT,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        super().__init__(code=code, message=message, model=model, retryable=True, raw=raw)
        self.status_code = status_code


class MalformedResponseError(TransportError):
    """A successful HTTP exchange whose body carries no usable answer."""

    def __init__(self, message: str, *, model: Optional[str] = None) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, model=model)


class FallbackExhausted(ProviderError):
    """Every (model, credential) pair has been tried for the current call."""

    def __init__(self, models_tried: int, credentials_tried: int) -> None:
        super().__init__(
            code=ErrorCode.EXHAUSTED,
            message=(
                "All fallback options exhausted. "
                f"Tried {models_tried} models with {credentials_tried} API keys."
            ),
        )
        self.models_tried = models_tried
        self.credentials_tried = credentials_tried


class StructuredDecodeError(ProviderError):
    """The model's answer could not be decoded into the requested type."""

    def __init__(self, message: str, *, text: str, raw: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.DECODE, message=message, raw=raw)
        self.text = text


class ConfigurationError(ProviderError):
    """Missing credentials or models; fatal at construction."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFIGURATION, message=message)


class UnsupportedImageError(ProviderError):
    """An image file whose extension maps to no accepted MIME type."""

    def __init__(self, extension: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED,
            message=f"Unsupported image format: {extension}",
        )
        self.extension = extension


__all__ = [
    "ProviderError",
    "TransportError",
    "MalformedResponseError",
    "FallbackExhausted",
    "StructuredDecodeError",
    "ConfigurationError",
    "UnsupportedImageError",
]
