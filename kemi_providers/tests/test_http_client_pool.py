"""Unit tests for shared httpx client pool and timeout configuration.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose yields different instances.
- Different base_url yields different instances.
- Timeouts come from the environment and differ per purpose.
"""
from __future__ import annotations

from kemi_providers.base.http import close_all_clients, get_httpx_client
from kemi_providers.base.timeouts import get_timeout_config


def setup_function(_):
    # Ensure a clean slate for each test
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2, "Different purposes should not share the same client instance"  # nosec B101


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.other.com", purpose="chat")
    assert c1 is not c2, "Different base URLs should not share the same client instance"  # nosec B101


def test_closed_clients_are_replaced():
    c1 = get_httpx_client(None, purpose="chat")
    close_all_clients()
    assert c1.is_closed  # nosec B101
    assert get_httpx_client(None, purpose="chat") is not c1  # nosec B101


def test_timeouts_from_env(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "7.5")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 7.5  # nosec B101
    assert cfg.stream_timeout_seconds == 60.0  # nosec B101
    assert cfg.for_purpose("chat").read == 7.5  # nosec B101
    assert cfg.for_purpose("stream").read == 60.0  # nosec B101
    assert get_httpx_client(None, purpose="chat").timeout.read == 7.5  # nosec B101
