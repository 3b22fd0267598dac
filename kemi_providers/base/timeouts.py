"""Timeout configuration for the HTTP transport.

Timeout values live here so the transport never hard-codes numeric literals.
The core request engine has no timeouts of its own: a call that hangs is
bounded only by the transport's httpx timeouts.

Supported environment variables (all optional, seconds, positive floats):
    PT_TIMEOUT_CONNECT_SECONDS
    PT_TIMEOUT_HTTP_SECONDS
    PT_TIMEOUT_STREAM_SECONDS

Values are parsed on first use and cached; the cache is refreshed when any of
the variables changes so tests can adjust them with ``monkeypatch``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_NAMES = (
    "PT_TIMEOUT_CONNECT_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        http_timeout_seconds: Read timeout for non-streaming requests.
        stream_timeout_seconds: Idle timeout between two streamed lines.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 120.0
    stream_timeout_seconds: float = 60.0

    def for_purpose(self, purpose: str) -> httpx.Timeout:
        """Return the httpx timeout for a ``"chat"`` or ``"stream"`` client."""
        read = self.stream_timeout_seconds if purpose == "stream" else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; return ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
