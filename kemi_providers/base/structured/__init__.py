"""Structured output: schema descriptors, prompt augmentation and decoding."""

from .schema import FieldSpec, SchemaDescriptor, type_tag
from .prompt import FORMAT_INSTRUCTION, StructuredOutputPromptBuilder, build_prompt, render_schema
from .decoding import Decoder, decode_structured, default_decoder, strip_code_fences

__all__ = [
    "FieldSpec",
    "SchemaDescriptor",
    "type_tag",
    "StructuredOutputPromptBuilder",
    "build_prompt",
    "render_schema",
    "FORMAT_INSTRUCTION",
    "Decoder",
    "decode_structured",
    "default_decoder",
    "strip_code_fences",
]
