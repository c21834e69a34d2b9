"""Field and word types shared by blueprint parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class FieldKind(Enum):
    """How a field is declared in the command template."""
    REQUIRED = "required"              # {{name}} or {{name#description}}
    OPTIONAL = "optional"              # [name]
    OPTIONAL_ARRAY = "optional_array"  # [name...]


class WordKind(Enum):
    """Classification of one argument-vector word."""
    LITERAL = "literal"
    OPTIONAL = "optional"
    OPTIONAL_ARRAY = "optional_array"
    MIXED = "mixed"


@dataclass(frozen=True)
class Field:
    """One named slot extracted from a command template.

    Required fields are recorded once per occurrence, so a name used in two
    words yields two ``Field`` entries that share the same schema property.
    """

    name: str
    kind: FieldKind
    source_arg_index: int
    description: Optional[str] = None
    # Exact ``{{...}}`` span matched for a required occurrence.
    placeholder: Optional[str] = None
    # Captured name before trimming/normalisation, shown in the display form.
    display_name: Optional[str] = None
    # Verbatim display text for flag-like optionals such as ``[--verbose]``.
    original_text: Optional[str] = None

    def display(self) -> str:
        """Return the form of this field used in the tool description."""
        if self.original_text:
            return self.original_text
        if self.kind is FieldKind.OPTIONAL_ARRAY:
            return f"[{self.name}...]"
        if self.kind is FieldKind.OPTIONAL:
            return f"[{self.name}]"
        return "{{" + (self.display_name if self.display_name is not None else self.name) + "}}"


@dataclass(frozen=True)
class Word:
    """A classified word of the argument vector (index >= 1)."""

    index: int
    text: str
    kind: WordKind
    fields: Tuple[Field, ...] = field(default_factory=tuple)
    # Form shown in the tool description.
    display_text: str = ""

    @property
    def optional_field(self) -> Optional[Field]:
        if self.kind in (WordKind.OPTIONAL, WordKind.OPTIONAL_ARRAY):
            return self.fields[0]
        return None

