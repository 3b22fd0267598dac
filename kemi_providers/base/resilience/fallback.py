"""Fallback loop shared by the generator and chat sessions.

Purpose
-------
:class:`RotatingClient` owns the credentials, the models and the current
:class:`RotationCursor` of one generator or session, and runs a single
logical call through :meth:`RotatingClient._call_with_fallback`:

1. invoke the attempt with the pair under the cursor;
2. on :class:`TransportError` (including malformed responses), log
   ``fallback.attempt_failed``, advance the cursor and go back to 1;
3. on success, reset the cursor to zero and return the result.

When :func:`advance` reports exhaustion the cursor is reset to zero, the
``fallback.exhausted`` event is logged and :class:`FallbackExhausted` is
raised with the last attempt's error as ``__cause__``.

Any other exception raised by the attempt (for example from a caller's
streaming callback) propagates immediately without rotation.

Concurrency
-----------
The cursor is plain instance state. One instance must not run calls from
several threads at once; independent instances do not share anything.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from ..errors import ConfigurationError, FallbackExhausted, ProviderError, TransportError
from ..log_support import LogContext, mask_credential
from ..logging import get_logger, normalized_log_event
from .rotation import RotationCursor, advance

T = TypeVar("T")

# (model, credential) -> result of one attempt
Attempt = Callable[[str, str], T]


class RotatingClient:
    """Base class holding rotation state for one generator or chat session."""

    provider_name = "gemini"

    def __init__(
        self,
        credentials: Sequence[str],
        models: Sequence[str],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not credentials:
            raise ConfigurationError("at least one API key is required")
        if not models:
            raise ConfigurationError("at least one model is required")
        self._credentials: Tuple[str, ...] = tuple(credentials)
        self._models: Tuple[str, ...] = tuple(models)
        self._cursor = RotationCursor()
        self._logger = logger or get_logger("gemini")

    @property
    def credentials(self) -> Tuple[str, ...]:
        return self._credentials

    @property
    def models(self) -> Tuple[str, ...]:
        return self._models

    @property
    def cursor(self) -> RotationCursor:
        return self._cursor

    @property
    def current_model(self) -> str:
        return self._models[self._cursor.model_index]

    @property
    def current_credential(self) -> str:
        return self._credentials[self._cursor.credential_index]

    def reset_rotation(self) -> None:
        """Return to the first (model, credential) pair."""
        self._cursor = RotationCursor()

    def _log_context(self, operation: str, model: Optional[str] = None, credential: Optional[str] = None) -> LogContext:
        return LogContext(
            provider=self.provider_name,
            model=model,
            operation=operation,
            credential=mask_credential(credential) if credential else None,
        )

    def _call_with_fallback(self, operation: str, attempt: Attempt[T]) -> T:
        """Run ``attempt`` until one pair succeeds or all pairs have failed."""
        while True:
            model, credential = self._cursor.select(self._models, self._credentials)
            try:
                result = attempt(model, credential)
            except TransportError as exc:
                self._on_attempt_failed(operation, model, credential, exc)
                continue
            self._cursor = RotationCursor()
            return result

    def _logged_call(self, operation: str, attempt: Attempt[T], *, event_prefix: str = "chat") -> T:
        """Run one logical call through the fallback loop with start/end events.

        Emits ``{event_prefix}.start`` and ``{event_prefix}.end`` around the call
        and ``{event_prefix}.error`` when a library error escapes it.
        """
        ctx = self._log_context(operation, self.current_model)
        normalized_log_event(
            self._logger,
            f"{event_prefix}.start",
            ctx,
            phase="start",
            models=len(self._models),
            credentials=len(self._credentials),
        )
        t0 = time.perf_counter()
        try:
            result = self._call_with_fallback(operation, attempt)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                f"{event_prefix}.error",
                ctx,
                phase="finalize",
                error_code=e.code.value,
                level=logging.ERROR,
                error=e.message,
            )
            raise
        normalized_log_event(
            self._logger,
            f"{event_prefix}.end",
            ctx,
            phase="finalize",
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return result

    def _on_attempt_failed(self, operation: str, model: str, credential: str, exc: TransportError) -> None:
        ctx = self._log_context(operation, model, credential)
        attempt_no = self._cursor.attempt_count + 1
        normalized_log_event(
            self._logger,
            "fallback.attempt_failed",
            ctx,
            phase="attempt",
            attempt=attempt_no,
            error_code=exc.code.value,
            level=logging.WARNING,
            error=exc.message,
            status_code=getattr(exc, "status_code", None),
        )
        try:
            self._cursor = advance(self._cursor, len(self._models), len(self._credentials))
        except FallbackExhausted as exhausted:
            self._cursor = RotationCursor()
            normalized_log_event(
                self._logger,
                "fallback.exhausted",
                ctx,
                phase="finalize",
                attempt=attempt_no,
                error_code=exhausted.code.value,
                level=logging.ERROR,
                models_tried=exhausted.models_tried,
                credentials_tried=exhausted.credentials_tried,
            )
            raise exhausted from exc


__all__ = ["RotatingClient", "Attempt"]
