"""Code-fence stripping and decoding of structured answers.

Models frequently wrap JSON answers in Markdown fences. ``strip_code_fences``
removes one leading fence (optionally tagged ``json``) and one trailing fence
and trims whitespace. ``decode_structured`` then hands the text to a decoder;
any decoder failure surfaces as :class:`StructuredDecodeError`, which the
request engine never retries.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Optional

from pydantic import TypeAdapter

from ..errors import StructuredDecodeError
from .schema import SchemaDescriptor

Decoder = Callable[[str], Any]

_FENCE = "```"
_JSON_FENCE = "```json"


def strip_code_fences(text: str) -> str:
    """Remove surrounding Markdown code fences and whitespace."""
    s = text.strip()
    if s.startswith(_JSON_FENCE):
        s = s[len(_JSON_FENCE):]
    elif s.startswith(_FENCE):
        s = s[len(_FENCE):]
    if s.endswith(_FENCE):
        s = s[: -len(_FENCE)]
    return s.strip()


def default_decoder(schema: SchemaDescriptor) -> Decoder:
    """Validate into ``schema.target`` when set, else plain ``json.loads``."""
    if schema.target is None:
        return json.loads
    return TypeAdapter(schema.target).validate_json


def decode_structured(text: str, schema: SchemaDescriptor, decoder: Optional[Decoder] = None) -> Any:
    """Strip fences from ``text`` and decode it.

    Raises:
        StructuredDecodeError: when the decoder raises; ``.text`` holds the
            stripped text that failed.
    """
    cleaned = strip_code_fences(text)
    decode = decoder or default_decoder(schema)
    try:
        return decode(cleaned)
    except Exception as exc:
        raise StructuredDecodeError(
            f"could not decode structured answer: {exc}",
            text=cleaned,
            raw=exc,
        ) from exc


__all__ = ["strip_code_fences", "decode_structured", "default_decoder", "Decoder"]
