"""Render bibliography entries back into canonical BibTeX source."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import cmp_to_key
import logging
import re

from .collation import locale_compare
from .config import BibtexFormatConfig
from .entries import (
    AbbreviationValue,
    ConcatValue,
    Entry,
    Field,
    FieldValue,
    NumberValue,
    StringEntry,
    TextValue,
)


logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ASSIGNMENT = " = "
_CONCATENATION = " # "


def field_order_comparator(order: Sequence[str]) -> Callable[[Field, Field], int]:
    """Return a comparator placing listed field names first, in list order.

    Fields missing from ``order`` come after every listed field and are
    ordered by name among themselves.
    """
    positions = {}
    for index, name in enumerate(order):
        positions.setdefault(name, index)

    def compare(a: Field, b: Field) -> int:
        index_a = positions.get(a.name)
        index_b = positions.get(b.name)
        if index_a is None and index_b is None:
            return locale_compare(a.name, b.name)
        if index_a is None:
            return 1
        if index_b is None:
            return -1
        return (index_a > index_b) - (index_a < index_b)

    return compare


def sort_fields(fields: list[Field], order: Sequence[str]) -> list[Field]:
    """Reorder ``fields`` in place following ``order`` and return it."""
    fields.sort(key=cmp_to_key(field_order_comparator(order)))
    return fields


def field_to_string(value: FieldValue, prefix: str, config: BibtexFormatConfig) -> str:
    """Render a field value.

    ``prefix`` is put in front of every line but the first of multi-line
    text. With an empty prefix, text is emitted verbatim.
    """
    match value:
        case NumberValue(content=content) | AbbreviationValue(content=content):
            return content
        case TextValue(content=content):
            if not prefix:
                return config.left + content + config.right
            lines = _LINE_BREAK.split(content)
            for index in range(1, len(lines)):
                lines[index] = prefix + lines[index].lstrip()
            return config.left + "\n".join(lines) + config.right
        case ConcatValue(parts=parts):
            return _CONCATENATION.join(field_to_string(part, prefix, config) for part in parts)
        case _:
            logger.debug("Unsupported field value %r rendered as empty text.", value)
            return ""


def _field_name(name: str, config: BibtexFormatConfig) -> str:
    return name.upper() if config.case == "UPPERCASE" else name


def format_entry(entry: Entry, config: BibtexFormatConfig) -> str:
    """Render ``entry`` as aligned BibTeX source.

    When ``config.sort_fields`` is set the entry's field list is reordered in
    place; copy the entry first to keep the original order.
    """
    parts = ["@", entry.entry_type, "{", entry.key or ""]

    width = 0
    if config.align_on_equal:
        width = max((len(field.name) for field in entry.fields), default=0)

    fields = entry.fields
    if config.sort_fields:
        fields = sort_fields(entry.fields, config.fields_order)

    for field in fields:
        padding = " " * (width - len(field.name)) if config.align_on_equal else ""
        indent = (
            config.tab
            + " " * len(field.name)
            + padding
            + " " * (len(_ASSIGNMENT) + len(config.left))
        )
        parts.append(",\n")
        parts.append(config.tab)
        parts.append(_field_name(field.name, config))
        parts.append(padding)
        parts.append(_ASSIGNMENT)
        parts.append(field_to_string(field.value, indent, config))

    if config.trailing_comma:
        parts.append(",")
    parts.append("\n}")
    return "".join(parts)


def format_string_entry(entry: StringEntry) -> str:
    """Return the verbatim source of a string, preamble or comment block."""
    return entry.raw.strip()


__all__ = [
    "field_order_comparator",
    "field_to_string",
    "format_entry",
    "format_string_entry",
    "sort_fields",
]
