"""Unified configuration layer for the Gemini client.

Goals
-----
* Centralize defaults (base URL, models, image models).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. GEMINI_API_KEYS, GEMINI_MODELS)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_gemini_settings(overrides)``.

Environment Variable Conventions
--------------------------------
GEMINI_BASE_URL, GEMINI_API_KEYS (comma-separated), GEMINI_API_KEY or
GOOGLE_API_KEY (single key), GEMINI_MODELS, GEMINI_IMAGE_MODELS (comma-separated),
GEMINI_DEFAULT_PROMPT.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, we attempt to load JSON first and
fall back to YAML. Structure example:

```
gemini:
  base_url: https://generativelanguage.googleapis.com
  api_keys: [key-one, key-two]
  models: [gemini-2.5-pro, gemini-2.5-flash]
  default_prompt: "Answer briefly."
```

Public API
----------
* GeminiSettings
* get_gemini_settings(overrides: dict | None = None) -> GeminiSettings
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple
import json
import os

import yaml

from .defaults import (
    GEMINI_API_VERSION,
    GEMINI_CONFIG_SECTION,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_IMAGE_MODELS,
    GEMINI_DEFAULT_MODELS,
)
from .env import (
    ENV_BASE_URL,
    ENV_DEFAULT_PROMPT,
    ENV_IMAGE_MODELS,
    ENV_MODELS,
    is_placeholder,
    resolve_api_keys,
    split_list,
    usable_keys,
)

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


@dataclass(frozen=True)
class GeminiSettings:
    """Resolved Gemini settings.

    ``api_keys`` and ``models`` are ordered; rotation walks them in order.
    Emptiness is not rejected here so callers can inspect partial settings;
    generators raise ``ConfigurationError`` on construction instead.
    """

    base_url: str = GEMINI_DEFAULT_BASE_URL
    api_keys: Tuple[str, ...] = ()
    models: Tuple[str, ...] = GEMINI_DEFAULT_MODELS
    image_models: Tuple[str, ...] = GEMINI_DEFAULT_IMAGE_MODELS
    default_prompt: Optional[str] = None

    def api_key(self, index: int = 0) -> str:
        return self.api_keys[index]

    def generate_content_url(self, model: str, key: str) -> str:
        return generate_content_url(self.base_url, model, key)

    def stream_generate_content_url(self, model: str, key: str) -> str:
        return stream_generate_content_url(self.base_url, model, key)


def _model_path(base_url: str, model: str) -> str:
    return f"{base_url.rstrip('/')}/{GEMINI_API_VERSION}/models/{model}"


def generate_content_url(base_url: str, model: str, key: str) -> str:
    """``{base}/v1beta/models/{model}:generateContent?key={key}``"""
    return f"{_model_path(base_url, model)}:generateContent?key={key}"


def stream_generate_content_url(base_url: str, model: str, key: str) -> str:
    """Streaming variant with ``alt=sse`` appended to the query."""
    return f"{_model_path(base_url, model)}:streamGenerateContent?key={key}&alt=sse"


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = p.read_text(encoding="utf-8")
    # Try JSON first; YAML is a superset so it catches the rest.
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return split_list(value)
    if isinstance(value, Sequence):
        return tuple(str(v).strip() for v in value if str(v).strip())
    return (str(value),)


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if base_url := os.getenv(ENV_BASE_URL):
        out["base_url"] = base_url
    keys, _ = resolve_api_keys()
    if keys:
        out["api_keys"] = keys
    if models := split_list(os.getenv(ENV_MODELS)):
        out["models"] = models
    if image_models := split_list(os.getenv(ENV_IMAGE_MODELS)):
        out["image_models"] = image_models
    if (prompt := os.getenv(ENV_DEFAULT_PROMPT)) is not None:
        out["default_prompt"] = prompt
    return out


def get_gemini_settings(overrides: Optional[Dict[str, Any]] = None) -> GeminiSettings:
    """Return merged Gemini settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored. List-valued fields accept a
    sequence or a comma-separated string; placeholder keys are dropped.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = {}

    # 1. External config file section (defaults live on the dataclass)
    file_cfg = _load_external_config().get(GEMINI_CONFIG_SECTION)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
        # Singular spelling used by older config files.
        if "api_key" in cfg and "api_keys" not in cfg:
            cfg["api_keys"] = cfg.pop("api_key")

    # 2. Env overrides
    cfg |= _env_overrides()

    # 3. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    kwargs: Dict[str, Any] = {}
    if cfg.get("base_url"):
        kwargs["base_url"] = str(cfg["base_url"])
    if "api_keys" in cfg:
        kwargs["api_keys"] = usable_keys(_as_tuple(cfg["api_keys"]))
    if models := _as_tuple(cfg.get("models")):
        kwargs["models"] = models
    if image_models := _as_tuple(cfg.get("image_models")):
        kwargs["image_models"] = image_models
    if cfg.get("default_prompt") is not None:
        kwargs["default_prompt"] = str(cfg["default_prompt"])
    return GeminiSettings(**kwargs)


__all__ = [
    "GeminiSettings",
    "get_gemini_settings",
    "generate_content_url",
    "stream_generate_content_url",
    "reset_config_cache",
]
