"""
Pydantic DTOs for the Gemini ``generateContent`` wire format.

Purpose
-------
Describe the JSON exchanged with ``generateContent`` and
``streamGenerateContent``. Field names are snake_case in Python and camelCase
on the wire (aliases). Response models ignore unknown fields so new API
additions never break parsing.

Request bodies are produced with :meth:`GenerateContentRequest.to_payload`,
which drops ``None`` fields (``role`` on single-turn requests and an absent
``systemInstruction``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())


class InlineData(_WireModel):
    """Base64 payload of an inline image part."""

    mime_type: str = Field(alias="mimeType")
    data: str


class WirePart(_WireModel):
    """One part of a content block: text or inline data."""

    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")


class WireContent(_WireModel):
    """A content block (one conversation turn on the wire)."""

    role: Optional[str] = None
    parts: List[WirePart] = Field(default_factory=list)

    @property
    def first_text(self) -> Optional[str]:
        """Text of the first part, ``None`` when absent."""
        return self.parts[0].text if self.parts else None


class GenerateContentRequest(_WireModel):
    """Body of a ``generateContent`` / ``streamGenerateContent`` call."""

    system_instruction: Optional[WireContent] = Field(default=None, alias="systemInstruction")
    contents: List[WireContent]

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready body with camelCase keys and no ``None`` values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Candidate(_WireModel):
    content: Optional[WireContent] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")
    index: int = 0


class UsageMetadata(_WireModel):
    prompt_token_count: Optional[int] = Field(default=None, alias="promptTokenCount")
    candidates_token_count: Optional[int] = Field(default=None, alias="candidatesTokenCount")
    total_token_count: Optional[int] = Field(default=None, alias="totalTokenCount")
    thoughts_token_count: Optional[int] = Field(default=None, alias="thoughtsTokenCount")


class GenerateContentResponse(_WireModel):
    """Response of ``generateContent``."""

    candidates: List[Candidate] = Field(default_factory=list)
    usage_metadata: Optional[UsageMetadata] = Field(default=None, alias="usageMetadata")
    model_version: Optional[str] = Field(default=None, alias="modelVersion")
    response_id: Optional[str] = Field(default=None, alias="responseId")

    @property
    def answer(self) -> Optional[str]:
        """Text of the first candidate's first part, ``None`` when absent."""
        if not self.candidates or self.candidates[0].content is None:
            return None
        return self.candidates[0].content.first_text


class GenerateContentChunk(GenerateContentResponse):
    """One ``data:`` payload of a ``streamGenerateContent?alt=sse`` response.

    Besides the candidate shape, a flat ``{"text": ...}`` object is accepted,
    which is what simple proxies and test fixtures emit.
    """

    text: Optional[str] = None

    @property
    def delta(self) -> Optional[str]:
        return self.answer if self.answer is not None else self.text


__all__ = [
    "InlineData",
    "WirePart",
    "WireContent",
    "GenerateContentRequest",
    "Candidate",
    "UsageMetadata",
    "GenerateContentResponse",
    "GenerateContentChunk",
]
