"""Blocking HTTP transport used by the Gemini generator and chat sessions.

Purpose:
- Describe the two calls the request engine needs (:class:`Transport`) so
  tests and host applications can inject their own implementation.
- Provide :class:`HttpxTransport`, the default implementation on top of the
  pooled ``httpx`` clients from :mod:`.client`.

Error contract:
- Every network failure, timeout or non-2xx status surfaces as
  :class:`TransportError` carrying a normalized ``ErrorCode``; a 2xx body that
  is not JSON surfaces as :class:`MalformedResponseError`. Both are rotated
  past by the fallback loop.
- Streaming failures after the first line (connection reset mid-stream) are
  raised from the line iterator as :class:`TransportError` too.
"""

from __future__ import annotations

from typing import Any, Dict, Generator, Mapping, Optional, Protocol

import httpx

from ..errors import MalformedResponseError, TransportError, classify_exception, code_for_status
from .client import get_httpx_client

JSON_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}
# Bound on response text echoed into error messages.
_ERROR_BODY_PREVIEW = 300


class Transport(Protocol):
    """Minimal surface of a blocking HTTP transport."""

    def post_json(
        self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> Dict[str, Any]:
        """POST ``body`` as JSON and return the decoded JSON response."""
        ...

    def stream_lines(
        self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> Generator[str, None, None]:
        """POST ``body`` as JSON and lazily yield the response body line by line.

        Must be closable: callers close it when they stop reading early so the
        underlying response is released.
        """
        ...


def _status_error(response: httpx.Response) -> TransportError:
    status = response.status_code
    preview = response.text[:_ERROR_BODY_PREVIEW] if response.text else ""
    return TransportError(
        f"HTTP {status}: {preview}".strip(),
        code=code_for_status(status),
        status_code=status,
    )


def _wrap(exc: Exception) -> TransportError:
    return TransportError(
        f"{type(exc).__name__}: {exc}",
        code=classify_exception(exc),
        raw=exc,
    )


class HttpxTransport:
    """:class:`Transport` implementation backed by ``httpx.Client``.

    Parameters:
        client: Optional client used for both regular and streaming calls.
            Tests pass a client built on ``httpx.MockTransport``. When omitted,
            pooled clients from :func:`get_httpx_client` are used.
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def _client_for(self, purpose: str) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(None, purpose)

    def post_json(
        self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> Dict[str, Any]:
        client = self._client_for("chat")
        try:
            response = client.post(url, json=dict(body), headers=dict(headers or JSON_HEADERS))
        except httpx.HTTPError as exc:
            raise _wrap(exc) from exc
        if response.is_error:
            raise _status_error(response)
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("response body is not valid JSON") from exc
        if not isinstance(data, dict):
            raise MalformedResponseError("response body is not a JSON object")
        return data

    def stream_lines(
        self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> Generator[str, None, None]:
        client = self._client_for("stream")
        try:
            with client.stream("POST", url, json=dict(body), headers=dict(headers or JSON_HEADERS)) as response:
                if response.is_error:
                    response.read()
                    raise _status_error(response)
                yield from response.iter_lines()
        except httpx.HTTPError as exc:
            raise _wrap(exc) from exc


__all__ = ["Transport", "HttpxTransport", "JSON_HEADERS"]
