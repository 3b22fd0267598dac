"""Credential redaction helpers for log payloads.

API keys travel in the ``key`` query parameter of every request URL, so URLs
must pass through :func:`mask_url` before they reach a log line.
"""
from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def mask_credential(credential: str | None) -> str:
    """Return a short, non-reversible label for an API key (``...abcd``)."""
    if not credential:
        return "<none>"
    if len(credential) <= 8:
        return "***"
    return f"...{credential[-4:]}"


def mask_url(url: str) -> str:
    """Replace the ``key`` query parameter value with its masked label."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (k, mask_credential(v) if k == "key" else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe=".:*")))


__all__ = ["mask_credential", "mask_url"]
