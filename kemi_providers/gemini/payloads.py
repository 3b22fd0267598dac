"""Request body shaping for Gemini ``generateContent`` calls.

Both builders return JSON-ready dicts produced through the wire DTOs in
:mod:`kemi_providers.base.dto.gemini_wire`:

- single-turn questions carry one content block without a role;
- chat requests carry one block per history message with ``role``
  ``user`` / ``model``.

``systemInstruction`` holds one text part per non-null prompt, default prompt
first, and is omitted when neither prompt is set.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..base.dto.gemini_wire import GenerateContentRequest, InlineData, WireContent, WirePart
from ..base.models import ChatMessage, ContentPart, ImageData


def system_instruction(default_prompt: Optional[str], prompt: Optional[str]) -> Optional[WireContent]:
    parts = [WirePart(text=p) for p in (default_prompt, prompt) if p is not None]
    return WireContent(parts=parts) if parts else None


def image_part(image: ImageData) -> WirePart:
    return WirePart(inline_data=InlineData(mime_type=image.mime_type, data=image.data))


def content_part(part: ContentPart) -> WirePart:
    if part.image is not None:
        return image_part(part.image)
    return WirePart(text=part.text)


def build_question_request(
    question: str,
    default_prompt: Optional[str] = None,
    prompt: Optional[str] = None,
    images: Iterable[ImageData] = (),
) -> Dict[str, Any]:
    """Body for a one-shot question, with optional inline images after the text."""
    parts: List[WirePart] = [WirePart(text=question)]
    parts.extend(image_part(image) for image in images)
    request = GenerateContentRequest(
        system_instruction=system_instruction(default_prompt, prompt),
        contents=[WireContent(parts=parts)],
    )
    return request.to_payload()


def build_chat_request(
    history: Iterable[ChatMessage],
    default_prompt: Optional[str] = None,
    system_prompt: Optional[str] = None,
) -> Dict[str, Any]:
    """Body carrying the whole conversation in order."""
    contents = [
        WireContent(role=message.role.wire_name, parts=[content_part(p) for p in message.content])
        for message in history
    ]
    request = GenerateContentRequest(
        system_instruction=system_instruction(default_prompt, system_prompt),
        contents=contents,
    )
    return request.to_payload()


__all__ = [
    "build_question_request",
    "build_chat_request",
    "system_instruction",
    "image_part",
    "content_part",
]
