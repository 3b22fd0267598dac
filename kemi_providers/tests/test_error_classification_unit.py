from __future__ import annotations

import types

import httpx

from kemi_providers.base.errors import (
    ErrorCode,
    FallbackExhausted,
    MalformedResponseError,
    ProviderError,
    TransportError,
    classify_exception,
    code_for_status,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    # Direct attr
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    # response.status_code
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("quota used up")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_httpx_errors():
    request = httpx.Request("POST", "https://gemini.test")
    assert classify_exception(httpx.ConnectError("x", request=request)) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.ConnectTimeout("x", request=request)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_code_for_status_fallbacks():
    assert code_for_status(429) is ErrorCode.RATE_LIMIT  # nosec B101
    assert code_for_status(507) is ErrorCode.SERVER_ERROR  # nosec B101
    assert code_for_status(418) is ErrorCode.UNKNOWN  # nosec B101


def test_error_hierarchy_and_retry_hints():
    malformed = MalformedResponseError("empty", model="m")
    assert isinstance(malformed, TransportError)  # nosec B101
    assert malformed.code is ErrorCode.VALIDATION and malformed.retryable  # nosec B101
    exhausted = FallbackExhausted(3, 2)
    assert not exhausted.retryable  # nosec B101
    assert exhausted.message == "All fallback options exhausted. Tried 3 models with 2 API keys."  # nosec B101
    assert "exhausted" in str(exhausted)  # nosec B101
