"""Command blueprints: parse a templated argv into an MCP tool and render it back.

A blueprint is built from the literal argument vector the server was started
with, for example::

    ["rails", "generate", "{{generator#what to generate}}", "[args...]"]

Word 0 is the base command. Every following word is one of:

* an optional field, when the whole word is ``[name]`` or ``[name...]``;
* a mixed word, when it contains ``{{name}}`` / ``{{name#description}}``
  markers, possibly surrounded by literal text;
* a literal word, passed through untouched.

Parsing and rendering both walk the same tuple of classified words, so the
tool description and the executed command cannot drift apart.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .params import lookup
from .types import Field, FieldKind, Word, WordKind

# Matches {{variable}} or {{variable#description}}
TEMPLATE_PATTERN = re.compile(r"\{\{([^#}]+)(?:#([^}]+))?\}\}")
# Matches [variable] or [variable...]
OPTIONAL_PATTERN = re.compile(r"^\[([^.\]]+)(\.\.\.)?\]$")

ARRAY_DESCRIPTION = "Additional command line arguments"
DESCRIPTION_PREFIX = "Run the shell command "

blueprint_logger = logging.getLogger(__name__)


def normalize_name(raw: str) -> str:
    """Return the schema/lookup key for a captured field name."""
    return raw.strip().replace("-", "_")


@dataclass(frozen=True)
class Blueprint:
    """Parsed representation of a templated command."""

    base_command: str
    tool_name: str
    tool_description: str
    command_format: str = ""
    words: Tuple[Word, ...] = field(default_factory=tuple)
    # Derived from ``words``; not part of eq/hash.
    _properties: Dict[str, Dict[str, Any]] = field(default_factory=dict, repr=False, compare=False)
    _required: Tuple[str, ...] = field(default_factory=tuple, repr=False)

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "Blueprint":
        """Tokenize ``args`` and derive the field registry, schema and description."""
        args = list(args)
        if not args:
            return cls(base_command="", tool_name="", tool_description="")

        base_command = args[0]
        properties: Dict[str, Dict[str, Any]] = {}
        required: List[str] = []
        words: List[Word] = []

        for index in range(1, len(args)):
            word = _classify(index, args[index])
            words.append(word)
            for occurrence in word.fields:
                _register(occurrence, properties, required)

        command_format = " ".join([base_command] + [word.display_text for word in words])
        blueprint = cls(
            base_command=base_command,
            tool_name=base_command.replace("-", "_"),
            tool_description=DESCRIPTION_PREFIX + "`" + command_format + "`",
            command_format=command_format,
            words=tuple(words),
            _properties=properties,
            _required=tuple(required),
        )
        blueprint_logger.debug(f"Parsed blueprint {blueprint.tool_name!r} with fields {list(properties)}")
        return blueprint

    @property
    def fields(self) -> Tuple[Field, ...]:
        """Every field occurrence, in argument order."""
        return tuple(occurrence for word in self.words for occurrence in word.fields)

    @property
    def required(self) -> Tuple[str, ...]:
        return self._required

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for the tool input; a fresh copy on every access."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": copy.deepcopy(self._properties),
        }
        if self._required:
            schema["required"] = list(self._required)
        return schema

    def build_command_args(self, params: Optional[Mapping[str, Any]] = None) -> List[str]:
        """Render the concrete argument vector for ``params``.

        Missing or mistyped values never raise: optional words are dropped and
        required markers are left as literal text.
        """
        result = [self.base_command]
        for word in self.words:
            if word.kind is WordKind.OPTIONAL_ARRAY:
                value = lookup(params, word.optional_field.name)
                if value is not None:
                    result.extend(value.as_items())
            elif word.kind is WordKind.OPTIONAL:
                value = lookup(params, word.optional_field.name)
                text = value.as_string() if value is not None else None
                if text:
                    result.append(text)
            elif word.kind is WordKind.MIXED:
                result.append(_substitute(word.text, params))
            else:
                result.append(word.text)
        return result


def _classify(index: int, arg: str) -> Word:
    optional = OPTIONAL_PATTERN.match(arg)
    if optional:
        raw_name, ellipsis = optional.group(1), optional.group(2)
        kind = FieldKind.OPTIONAL_ARRAY if ellipsis else FieldKind.OPTIONAL
        occurrence = Field(
            name=raw_name.replace("-", "_"),
            kind=kind,
            source_arg_index=index,
            description=ARRAY_DESCRIPTION if ellipsis else None,
            original_text=arg if raw_name.startswith("-") else None,
        )
        word_kind = WordKind.OPTIONAL_ARRAY if ellipsis else WordKind.OPTIONAL
        return Word(index, arg, word_kind, (occurrence,), occurrence.display())

    occurrences = tuple(
        Field(
            name=normalize_name(match.group(1)),
            kind=FieldKind.REQUIRED,
            source_arg_index=index,
            description=(match.group(2) or "").strip() or None,
            placeholder=match.group(0),
            display_name=match.group(1),
        )
        for match in TEMPLATE_PATTERN.finditer(arg)
    )
    if not occurrences:
        return Word(index, arg, WordKind.LITERAL, (), arg)

    display = TEMPLATE_PATTERN.sub(lambda match: "{{" + match.group(1) + "}}", arg)
    return Word(index, arg, WordKind.MIXED, occurrences, display)


def _register(
    occurrence: Field,
    properties: Dict[str, Dict[str, Any]],
    required: List[str],
) -> None:
    name = occurrence.name
    if occurrence.kind is FieldKind.OPTIONAL_ARRAY:
        properties[name] = {
            "type": "array",
            "items": {"type": "string"},
            "description": ARRAY_DESCRIPTION,
        }
        if name not in required:
            required.append(name)
        return
    if occurrence.kind is FieldKind.OPTIONAL:
        properties[name] = {"type": "string"}
        return

    # A later non-empty description replaces an earlier one; an empty one
    # never clears it.
    if name not in properties or occurrence.description:
        prop: Dict[str, Any] = {"type": "string"}
        if occurrence.description:
            prop["description"] = occurrence.description
        properties[name] = prop
    if name not in required:
        required.append(name)


def _substitute(arg: str, params: Optional[Mapping[str, Any]]) -> str:
    def replace(match: "re.Match[str]") -> str:
        value = lookup(params, normalize_name(match.group(1)))
        text = value.as_string() if value is not None else None
        return match.group(0) if text is None else text

    # The callable's return value is inserted verbatim and never re-scanned.
    return TEMPLATE_PATTERN.sub(replace, arg)
