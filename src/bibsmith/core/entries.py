"""Entry model consumed by the sorting and formatting layers.

Architecture
: Parsed bibliographies are a sequence of `BibEntry` values, a closed union of
  `Entry` (a real reference with a key and fields) and `StringEntry` (an
  `@string`, `@preamble` or `@comment` block kept verbatim).
: Field values form a second closed union, `FieldValue`, mirroring the token
  kinds BibTeX distinguishes: braced or quoted text, bare numbers, bare macro
  names and `#` concatenations.

Implementation Rationale
: Consumers dispatch on these unions with `match` statements so that adding a
  new entry kind surfaces every site that must handle it.
: `Entry` hashes by identity. Two references with identical content are still
  two distinct records, which is what duplicate tracking needs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, Literal, TypeAlias


@dataclass(frozen=True, slots=True)
class TextValue:
    """Braced or quoted literal, possibly spanning several lines."""

    kind: ClassVar[Literal["text"]] = "text"

    content: str


@dataclass(frozen=True, slots=True)
class NumberValue:
    """Bare numeric token such as ``year = 2020``."""

    kind: ClassVar[Literal["number"]] = "number"

    content: str


@dataclass(frozen=True, slots=True)
class AbbreviationValue:
    """Bare macro reference such as ``month = jan``."""

    kind: ClassVar[Literal["abbreviation"]] = "abbreviation"

    content: str


@dataclass(frozen=True, slots=True)
class ConcatValue:
    """Values joined with ``#`` in the source."""

    kind: ClassVar[Literal["concat"]] = "concat"

    parts: tuple[FieldValue, ...] = ()

    @classmethod
    def of(cls, parts: Iterable[FieldValue]) -> ConcatValue:
        return cls(tuple(parts))


FieldValue: TypeAlias = TextValue | NumberValue | AbbreviationValue | ConcatValue


@dataclass(slots=True)
class Field:
    """A ``name = value`` pair inside an entry."""

    name: str
    value: FieldValue


@dataclass(eq=False, slots=True)
class Entry:
    """A real bibliography entry such as ``@article{key, ...}``."""

    entry_type: str
    key: str | None = None
    fields: list[Field] = field(default_factory=list)

    def get(self, name: str) -> Field | None:
        """Return the first field called ``name`` (exact match), if any."""
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None


@dataclass(eq=False, slots=True)
class StringEntry:
    """A string, preamble or comment block carried through untouched."""

    entry_type: str
    raw: str = ""


BibEntry: TypeAlias = Entry | StringEntry


__all__ = [
    "AbbreviationValue",
    "BibEntry",
    "ConcatValue",
    "Entry",
    "Field",
    "FieldValue",
    "NumberValue",
    "StringEntry",
    "TextValue",
]
