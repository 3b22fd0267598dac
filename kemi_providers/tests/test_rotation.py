"""Unit tests for the rotation cursor state machine.

Covers:
- Credential-fastest visiting order with model wrap-around.
- Exhaustion after exactly models x credentials positions.
- ``advance`` never mutates its input.
"""
from __future__ import annotations

import itertools

import pytest

from kemi_providers.base.errors import ConfigurationError, ErrorCode, FallbackExhausted
from kemi_providers.base.resilience import RotationCursor, advance, rotation_order


def test_zero_cursor_defaults():
    cursor = RotationCursor()
    assert (cursor.model_index, cursor.credential_index, cursor.attempt_count) == (0, 0, 0)  # nosec B101


def test_credentials_rotate_fastest_then_model_advances():
    cursor = RotationCursor()
    cursor = advance(cursor, 2, 3)
    assert (cursor.model_index, cursor.credential_index) == (0, 1)  # nosec B101
    cursor = advance(cursor, 2, 3)
    assert (cursor.model_index, cursor.credential_index) == (0, 2)  # nosec B101
    cursor = advance(cursor, 2, 3)
    assert (cursor.model_index, cursor.credential_index) == (1, 0)  # nosec B101
    assert cursor.attempt_count == 3  # nosec B101


def test_model_index_wraps_after_last_model():
    cursor = RotationCursor(model_index=1, credential_index=1, attempt_count=0)
    nxt = advance(cursor, 2, 2)
    assert (nxt.model_index, nxt.credential_index) == (0, 0)  # nosec B101


@pytest.mark.parametrize("models,credentials", [(1, 1), (1, 3), (3, 1), (2, 2), (3, 4)])
def test_every_pair_visited_exactly_once(models, credentials):
    order = list(rotation_order(models, credentials))
    assert len(order) == models * credentials  # nosec B101
    assert sorted(order) == sorted(itertools.product(range(models), range(credentials)))  # nosec B101
    expected = [(m, c) for m in range(models) for c in range(credentials)]
    assert order == expected  # nosec B101


def test_exhaustion_after_cross_product():
    cursor = RotationCursor()
    for _ in range(2 * 2 - 1):
        cursor = advance(cursor, 2, 2)
    with pytest.raises(FallbackExhausted) as info:
        advance(cursor, 2, 2)
    assert info.value.models_tried == 2  # nosec B101
    assert info.value.credentials_tried == 2  # nosec B101
    assert info.value.code is ErrorCode.EXHAUSTED  # nosec B101
    assert "Tried 2 models with 2 API keys" in info.value.message  # nosec B101


def test_single_pair_exhausts_on_first_advance():
    with pytest.raises(FallbackExhausted):
        advance(RotationCursor(), 1, 1)


def test_advance_does_not_mutate_input():
    cursor = RotationCursor()
    nxt = cursor.advance(3, 3)
    assert cursor == RotationCursor()  # nosec B101
    assert nxt is not cursor  # nosec B101
    with pytest.raises(Exception):
        cursor.model_index = 5  # type: ignore[misc]


def test_select_returns_pair_under_cursor():
    cursor = RotationCursor(model_index=1, credential_index=0, attempt_count=2)
    assert cursor.select(["m0", "m1"], ["k0", "k1"]) == ("m1", "k0")  # nosec B101


@pytest.mark.parametrize("models,credentials", [(0, 1), (1, 0)])
def test_counts_below_one_are_configuration_errors(models, credentials):
    with pytest.raises(ConfigurationError):
        advance(RotationCursor(), models, credentials)
