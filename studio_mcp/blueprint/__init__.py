"""Command blueprint parsing and rendering."""

from .blueprint import (
    ARRAY_DESCRIPTION,
    OPTIONAL_PATTERN,
    TEMPLATE_PATTERN,
    Blueprint,
    normalize_name,
)
from .params import ParamKind, ParamValue
from .types import Field, FieldKind, Word, WordKind

__all__ = [
    "ARRAY_DESCRIPTION",
    "OPTIONAL_PATTERN",
    "TEMPLATE_PATTERN",
    "Blueprint",
    "Field",
    "FieldKind",
    "ParamKind",
    "ParamValue",
    "Word",
    "WordKind",
    "normalize_name",
]
