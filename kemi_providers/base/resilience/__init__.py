"""Resilience primitives: rotation cursor and the fallback loop."""

from .rotation import RotationCursor, advance, rotation_order
from .fallback import Attempt, RotatingClient

__all__ = ["RotationCursor", "advance", "rotation_order", "RotatingClient", "Attempt"]
