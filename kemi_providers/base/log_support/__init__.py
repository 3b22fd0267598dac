"""Auxiliary logging helpers (formatters, context, redaction) used by base.logging."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext
from .redaction import mask_credential, mask_url

__all__ = ["JsonFormatter", "ISO", "LogContext", "mask_credential", "mask_url"]
