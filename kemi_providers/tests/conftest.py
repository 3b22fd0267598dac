"""Pytest configuration for the kemi_providers test suite.

Provides an offline, scripted transport so generator and chat tests never
touch the network, and closes pooled httpx clients after the session.
"""

from __future__ import annotations

import atexit
import copy
from contextlib import suppress
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

import pytest

from kemi_providers.base.errors import TransportError
from kemi_providers.config import GeminiSettings, reset_config_cache


class FakeTransport:
    """Scripted :class:`~kemi_providers.base.http.Transport`.

    Each call consumes the next scripted outcome: an exception instance is
    raised, anything else is returned (``post_json``) or yielded line by line
    (``stream_lines``). An exhausted script raises ``TransportError``.
    Every call is recorded with its URL and a deep copy of its body, and
    ``closed_streams`` counts line streams that were finished or closed.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None, stream_outcomes: Optional[List[Any]] = None) -> None:
        self.outcomes: List[Any] = list(outcomes or [])
        self.stream_outcomes: List[Any] = list(stream_outcomes or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed_streams = 0

    @staticmethod
    def _next(script: List[Any]) -> Any:
        if not script:
            return TransportError("no scripted response left")
        return script.pop(0)

    def post_json(self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        self.calls.append({"url": url, "body": copy.deepcopy(dict(body))})
        outcome = self._next(self.outcomes)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def stream_lines(
        self, url: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> Iterator[str]:
        self.calls.append({"url": url, "body": copy.deepcopy(dict(body))})
        outcome = self._next(self.stream_outcomes)
        if isinstance(outcome, BaseException):
            raise outcome
        try:
            yield from outcome
        finally:
            self.closed_streams += 1

    @property
    def urls(self) -> List[str]:
        return [c["url"] for c in self.calls]


def answer_body(text: str) -> Dict[str, Any]:
    """Minimal successful ``generateContent`` response."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture()
def make_transport() -> Callable[..., FakeTransport]:
    """Factory fixture: ``make_transport([answer, TransportError(...)])``."""
    return FakeTransport


@pytest.fixture()
def answer() -> Callable[[str], Dict[str, Any]]:
    return answer_body


@pytest.fixture()
def settings() -> GeminiSettings:
    """Two models x two keys, no default prompt."""
    return GeminiSettings(
        base_url="https://gemini.test",
        api_keys=("key-one-0001", "key-two-0002"),
        models=("model-a", "model-b"),
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ambient Gemini env vars and config files out of every test."""
    for name in (
        "GEMINI_BASE_URL",
        "GEMINI_API_KEYS",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "GEMINI_MODELS",
        "GEMINI_IMAGE_MODELS",
        "GEMINI_DEFAULT_PROMPT",
        "PROVIDERS_CONFIG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", "/nonexistent/.env")
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    """Close pooled httpx clients after the test session."""

    from kemi_providers.base.http import close_all_clients

    def _cleanup() -> None:
        with suppress(Exception):  # teardown must not fail tests
            close_all_clients()

    yield
    _cleanup()
    atexit.register(_cleanup)
