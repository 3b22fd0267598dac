"""kemi_providers.config.env
=========================

Environment variable names and helpers for Gemini credentials.

Purpose
-------
- Single source of truth for the environment variables the config layer
  reads (canonical names and aliases).
- Small utilities to split list-valued variables and to resolve credentials.

Design Notes
------------
- Gemini has used both ``GEMINI_API_KEY`` and ``GOOGLE_API_KEY``; the
  canonical name comes first in ``KEY_ALIASES`` to establish precedence.
- ``GEMINI_API_KEYS`` (comma-separated) wins over the single-key variables
  because rotation needs an ordered list.

Failure Modes
-------------
- Helpers never raise on unset variables; they return empty tuples or
  ``None`` and let callers decide (the generator raises
  ``ConfigurationError`` when nothing usable remains).
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

ENV_BASE_URL = "GEMINI_BASE_URL"
ENV_API_KEYS = "GEMINI_API_KEYS"
ENV_MODELS = "GEMINI_MODELS"
ENV_IMAGE_MODELS = "GEMINI_IMAGE_MODELS"
ENV_DEFAULT_PROMPT = "GEMINI_DEFAULT_PROMPT"

# Ordered tuple of acceptable single-key env var names (canonical first)
KEY_ALIASES: Tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def split_list(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated value, dropping blanks and keeping order."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def usable_keys(keys: Iterable[str]) -> Tuple[str, ...]:
    """Drop empty and placeholder credentials, preserving order."""
    return tuple(k.strip() for k in keys if k and k.strip() and not is_placeholder(k))


def resolve_api_keys() -> Tuple[Tuple[str, ...], Optional[str]]:
    """Resolve Gemini credentials from the process environment.

    Returns
    -------
    Tuple[Tuple[str, ...], Optional[str]]
        (keys, env_var_used). ``((), None)`` when nothing usable is set.
    """
    keys = usable_keys(split_list(os.environ.get(ENV_API_KEYS)))
    if keys:
        return keys, ENV_API_KEYS
    for name in KEY_ALIASES:
        keys = usable_keys(split_list(os.environ.get(name)))
        if keys:
            return keys, name
    return (), None


__all__ = [
    "ENV_BASE_URL",
    "ENV_API_KEYS",
    "ENV_MODELS",
    "ENV_IMAGE_MODELS",
    "ENV_DEFAULT_PROMPT",
    "KEY_ALIASES",
    "is_placeholder",
    "split_list",
    "usable_keys",
    "resolve_api_keys",
]
