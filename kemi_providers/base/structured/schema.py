"""Explicit schema descriptors for structured output.

A :class:`SchemaDescriptor` lists the fields the model must return (name,
type tag, optional description) plus an optional class-level hint. Callers
build one by hand or derive it from a pydantic model with
:meth:`SchemaDescriptor.from_model`, which reads the model's declared
``model_fields`` (annotation and ``Field(description=...)``).
"""
from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel


def type_tag(annotation: Any) -> str:
    """Render a type annotation as a short tag for the prompt.

    ``Optional[X]`` renders as ``X``; generics keep their arguments
    (``list[str]``); literals render their values.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return type_tag(args[0])
        return " | ".join(type_tag(a) for a in args)
    if origin is Literal:
        return " | ".join(repr(a) for a in get_args(annotation))
    if origin is not None:
        name = getattr(origin, "__name__", str(origin))
        args = get_args(annotation)
        return f"{name}[{', '.join(type_tag(a) for a in args)}]" if args else name
    return getattr(annotation, "__name__", str(annotation))


@dataclass(frozen=True)
class FieldSpec:
    """One field of the expected JSON object."""

    name: str
    type_tag: str
    description: Optional[str] = None


@dataclass(frozen=True)
class SchemaDescriptor:
    """Fields and hint describing a structured answer.

    Attributes:
        fields: Ordered field specs rendered into the prompt.
        hint: Free-form instruction placed before the format block.
        target: Optional type the answer is validated into by the default
            decoder (any type pydantic's ``TypeAdapter`` accepts).
    """

    fields: Tuple[FieldSpec, ...]
    hint: Optional[str] = None
    target: Optional[Any] = None

    @classmethod
    def from_model(cls, model_cls: Type[BaseModel], hint: Optional[str] = None) -> "SchemaDescriptor":
        fields = tuple(
            FieldSpec(
                name=info.alias or name,
                type_tag=type_tag(info.annotation),
                description=info.description,
            )
            for name, info in model_cls.model_fields.items()
        )
        return cls(fields=fields, hint=hint, target=model_cls)


__all__ = ["FieldSpec", "SchemaDescriptor", "type_tag"]
