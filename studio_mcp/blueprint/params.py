"""Coercion of loosely typed ``tools/call`` arguments.

Arguments arrive decoded from JSON, so a value bound to a field can be a
string, a list of mixed items, or anything else. Rendering only understands
two shapes; everything else is treated as absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple


class ParamKind(Enum):
    STRING = "string"
    STRING_SEQUENCE = "string_sequence"
    OTHER = "other"


@dataclass(frozen=True)
class ParamValue:
    """A parameter value reduced to the shapes the renderer understands."""

    kind: ParamKind
    text: str = ""
    items: Tuple[str, ...] = ()

    @classmethod
    def coerce(cls, value: Any) -> "ParamValue":
        if isinstance(value, str):
            return cls(ParamKind.STRING, text=value)
        # bytes is a Sequence too, but never a list of arguments.
        if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
            # Non-string items are dropped rather than stringified.
            return cls(
                ParamKind.STRING_SEQUENCE,
                items=tuple(item for item in value if isinstance(item, str)),
            )
        return cls(ParamKind.OTHER)

    def as_string(self) -> Optional[str]:
        return self.text if self.kind is ParamKind.STRING else None

    def as_items(self) -> Tuple[str, ...]:
        return self.items if self.kind is ParamKind.STRING_SEQUENCE else ()


def lookup(params: Optional[Mapping[str, Any]], name: str) -> Optional[ParamValue]:
    """Return the coerced value bound to ``name``, or None when unbound."""
    if not params or name not in params:
        return None
    return ParamValue.coerce(params[name])
