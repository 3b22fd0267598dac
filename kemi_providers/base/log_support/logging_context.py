"""Structured logging context object for generator and chat events.

:class:`LogContext` carries the fields shared by every event of one logical
call: provider, model, the operation name and the masked credential in use.
``to_dict`` merges ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    credential: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_target(self, model: str, credential: str) -> "LogContext":
        """Return a copy pointing at another model and (already masked) credential."""
        return replace(self, model=model, credential=credential, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
