"""Streaming package: SSE decoding for streamed generations."""

from .sse_decoder import (
    DATA_PREFIX,
    DONE_SENTINEL,
    ChunkCallback,
    ChunkParser,
    StreamDecoder,
    parse_gemini_chunk,
)

__all__ = [
    "StreamDecoder",
    "ChunkParser",
    "ChunkCallback",
    "parse_gemini_chunk",
    "DATA_PREFIX",
    "DONE_SENTINEL",
]
