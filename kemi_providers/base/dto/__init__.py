"""DTO validation package for the Gemini wire format."""

from .gemini_wire import (
    Candidate,
    GenerateContentChunk,
    GenerateContentRequest,
    GenerateContentResponse,
    InlineData,
    UsageMetadata,
    WireContent,
    WirePart,
)

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
