"""kemi_providers.config.defaults
=============================

Central place for small, stable default values used across the
kemi_providers package. These defaults can be overridden via environment
variables, an external configuration file, or in-code overrides, but provide
sensible fallbacks for local development and tests.

This module avoids importing from other kemi_providers packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Gemini ----
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
# Ordered: the first model is tried first and rotation moves down the list.
GEMINI_DEFAULT_MODELS = ("gemini-2.5-pro",)
GEMINI_DEFAULT_IMAGE_MODELS = ("gemini-2.5-flash-image",)
GEMINI_API_VERSION = "v1beta"

# Config file section holding Gemini settings.
GEMINI_CONFIG_SECTION = "gemini"


__all__ = [
    "GEMINI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_MODELS",
    "GEMINI_DEFAULT_IMAGE_MODELS",
    "GEMINI_API_VERSION",
    "GEMINI_CONFIG_SECTION",
]
