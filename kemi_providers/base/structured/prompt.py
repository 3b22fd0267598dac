"""Prompt augmentation for structured output."""
from __future__ import annotations

import json
from typing import List

from .schema import SchemaDescriptor

FORMAT_INSTRUCTION = "Respond in this exact JSON format:"


def render_schema(schema: SchemaDescriptor) -> str:
    """Render the JSON-like format block, one field per line.

    Example line: ``  "age": "int", // Age in years``
    """
    lines: List[str] = ["{"]
    for field_spec in schema.fields:
        line = f"  {json.dumps(field_spec.name)}: {json.dumps(field_spec.type_tag)},"
        if field_spec.description:
            line += f" // {field_spec.description}"
        lines.append(line)
    lines.append("}")
    return "\n".join(lines)


class StructuredOutputPromptBuilder:
    """Builds the question sent for a structured answer."""

    def build_prompt(self, question: str, schema: SchemaDescriptor) -> str:
        sections = [question]
        if schema.hint:
            sections.append(schema.hint)
        sections.append(f"{FORMAT_INSTRUCTION}\n{render_schema(schema)}")
        return "\n\n".join(sections).strip()


def build_prompt(question: str, schema: SchemaDescriptor) -> str:
    return StructuredOutputPromptBuilder().build_prompt(question, schema)


__all__ = ["StructuredOutputPromptBuilder", "build_prompt", "render_schema", "FORMAT_INSTRUCTION"]
