"""(model, credential) rotation state machine.

``RotationCursor`` is an immutable value; :func:`advance` is the only
transition and returns a new cursor, or raises :class:`FallbackExhausted`
once every pair of the cross product has been attempted.

Visiting order: credentials rotate fastest, models slowest, and the model
index wraps to 0 after the last model. Starting from the zero cursor, the
first ``model_count * credential_count`` cursors therefore cover each pair
exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from ..errors import ConfigurationError, FallbackExhausted


@dataclass(frozen=True)
class RotationCursor:
    """Position in the rotation and number of fallback transitions so far."""

    model_index: int = 0
    credential_index: int = 0
    attempt_count: int = 0

    def advance(self, model_count: int, credential_count: int) -> "RotationCursor":
        return advance(self, model_count, credential_count)

    def select(self, models: Sequence[str], credentials: Sequence[str]) -> Tuple[str, str]:
        """Return the ``(model, credential)`` pair this cursor points at."""
        return models[self.model_index], credentials[self.credential_index]


def advance(cursor: RotationCursor, model_count: int, credential_count: int) -> RotationCursor:
    """Return the cursor for the next fallback attempt.

    Raises:
        ConfigurationError: when either count is below 1.
        FallbackExhausted: when ``cursor.attempt_count + 1`` reaches
            ``model_count * credential_count``.
    """
    if model_count < 1 or credential_count < 1:
        raise ConfigurationError("rotation needs at least one model and one credential")
    attempts = cursor.attempt_count + 1
    if attempts >= model_count * credential_count:
        raise FallbackExhausted(model_count, credential_count)
    if cursor.credential_index >= credential_count - 1:
        return RotationCursor(
            model_index=(cursor.model_index + 1) % model_count,
            credential_index=0,
            attempt_count=attempts,
        )
    return RotationCursor(
        model_index=cursor.model_index,
        credential_index=cursor.credential_index + 1,
        attempt_count=attempts,
    )


def rotation_order(model_count: int, credential_count: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(model_index, credential_index)`` in the order a failing call visits them."""
    cursor = RotationCursor()
    while True:
        yield cursor.model_index, cursor.credential_index
        try:
            cursor = advance(cursor, model_count, credential_count)
        except FallbackExhausted:
            return


__all__ = ["RotationCursor", "advance", "rotation_order"]
