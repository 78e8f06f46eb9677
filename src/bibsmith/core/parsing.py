"""Turn BibTeX source into the entry model.

Blocks are located first. Every block is checked by its own pybtex parser,
which keeps duplicate keys (pybtex rejects them within one database) and lets
a malformed block pass through verbatim instead of failing the whole file.

Field values are read from the block source rather than from pybtex, which
expands macros, flattens concatenations and normalises whitespace. Braced and
quoted text keeps its line breaks, bare numbers and macro names stay bare and
``#`` concatenations stay concatenations. Text between blocks is kept as a
comment block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import io
import logging
from pathlib import Path
import re

from pybtex.database.input import bibtex
from pybtex.exceptions import PybtexError

from .entries import (
    AbbreviationValue,
    BibEntry,
    ConcatValue,
    Entry,
    Field,
    FieldValue,
    NumberValue,
    StringEntry,
    TextValue,
)
from .exceptions import BibliographyParseError, exception_hint
from .issues import BibliographyIssue


logger = logging.getLogger(__name__)

STRING_BLOCK_TYPES = frozenset({"string", "preamble", "comment"})
FREE_TEXT_TYPE = "comment"

_BLOCK_START = re.compile(r"@\s*([A-Za-z][\w:-]*)\s*([{(])")
_TOKEN = re.compile(r"[^\s\"#%'(),={}]+")


@dataclass(frozen=True, slots=True)
class RawBlock:
    """An ``@type{...}`` block located in the source."""

    entry_type: str
    text: str
    body: str
    line: int
    start: int = 0
    end: int = 0


@dataclass(slots=True)
class ParsedBibliography:
    """Entries in source order and the problems met while reading them."""

    entries: list[BibEntry] = field(default_factory=list)
    issues: list[BibliographyIssue] = field(default_factory=list)


class _Macros(dict):
    """Macro table resolving unknown names to empty text.

    Abbreviations defined in another file are legitimate; the values are only
    needed to check the syntax of a block.
    """

    def __missing__(self, key: str) -> str:
        return ""


def _find_block_end(text: str, start: int, opener: str) -> int | None:
    depth = 1 if opener == "{" else 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if opener == "{" and depth == 0:
                return index + 1
        elif char == ")" and opener == "(" and depth == 0:
            return index + 1
    return None


def split_blocks(text: str) -> list[RawBlock]:
    """Locate the ``@`` blocks of ``text``."""
    blocks: list[RawBlock] = []
    position = 0
    while True:
        match = _BLOCK_START.search(text, position)
        if match is None:
            break
        end = _find_block_end(text, match.end(), match.group(2))
        if end is None:
            end = len(text)
            body = text[match.end() :]
        else:
            body = text[match.end() : end - 1]
        blocks.append(
            RawBlock(
                entry_type=match.group(1),
                text=text[match.start() : end],
                body=body,
                line=text.count("\n", 0, match.start()) + 1,
                start=match.start(),
                end=end,
            )
        )
        position = end
    return blocks


def _split_key(body: str) -> tuple[str | None, int]:
    """Return the citation key and the offset where the fields start."""
    head, comma, _ = body.partition(",")
    if "=" in head:
        return None, 0
    return head.strip() or None, len(head) + len(comma)


def _block_key(body: str) -> str | None:
    return _split_key(body)[0]


def _skip_space(body: str, position: int) -> int:
    while position < len(body) and body[position].isspace():
        position += 1
    return position


def _quoted_end(body: str, start: int) -> int | None:
    depth = 0
    for index in range(start, len(body)):
        char = body[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == '"' and depth == 0:
            return index + 1
    return None


def _read_part(body: str, position: int) -> tuple[FieldValue, int]:
    if position >= len(body):
        raise PybtexError("field value expected at end of entry")
    char = body[position]
    if char in "{\"":
        end = (
            _find_block_end(body, position + 1, "{")
            if char == "{"
            else _quoted_end(body, position + 1)
        )
        if end is None:
            raise PybtexError(f"unterminated value starting with {char!r}")
        return TextValue(body[position + 1 : end - 1]), end
    match = _TOKEN.match(body, position)
    if match is None:
        raise PybtexError(f"unexpected character {char!r} in field value")
    token = match.group(0)
    if token.isdigit():
        return NumberValue(token), match.end()
    return AbbreviationValue(token), match.end()


def _read_value(body: str, position: int) -> tuple[FieldValue, int]:
    parts: list[FieldValue] = []
    while True:
        part, position = _read_part(body, _skip_space(body, position))
        parts.append(part)
        position = _skip_space(body, position)
        if position < len(body) and body[position] == "#":
            position += 1
            continue
        break
    if len(parts) == 1:
        return parts[0], position
    return ConcatValue.of(parts), position


def read_fields(body: str, position: int = 0) -> list[Field]:
    """Tokenise the ``name = value, ...`` list of an entry body."""
    fields: list[Field] = []
    while True:
        position = _skip_space(body, position)
        if position >= len(body):
            return fields
        match = _TOKEN.match(body, position)
        if match is None:
            raise PybtexError(f"field name expected, got {body[position]!r}")
        position = _skip_space(body, match.end())
        if position >= len(body) or body[position] != "=":
            raise PybtexError(f"'=' expected after field {match.group(0)!r}")
        value, position = _read_value(body, position + 1)
        fields.append(Field(name=match.group(0), value=value))
        if position < len(body):
            if body[position] != ",":
                raise PybtexError(f"',' expected after field {match.group(0)!r}")
            position += 1


def _check_block(block: RawBlock, macros: dict[str, str]) -> dict[str, str]:
    """Run pybtex over ``block`` and return the macros known afterwards."""
    parser = bibtex.Parser(person_fields=())
    parser.macros = _Macros(parser.macros)
    parser.macros.update(macros)
    parser.parse_stream(io.StringIO(block.text))
    return dict(parser.macros)


def _parse_block(block: RawBlock, macros: dict[str, str]) -> Entry:
    _check_block(block, macros)
    key, position = _split_key(block.body)
    return Entry(
        entry_type=block.entry_type,
        key=key,
        fields=read_fields(block.body, position),
    )


def _free_text(text: str) -> StringEntry | None:
    stripped = text.strip()
    if not stripped:
        return None
    return StringEntry(entry_type=FREE_TEXT_TYPE, raw=stripped)


def parse_bibliography(text: str, *, source: Path | None = None) -> ParsedBibliography:
    """Parse BibTeX ``text`` into entries, keeping malformed blocks verbatim."""
    result = ParsedBibliography()
    macros: dict[str, str] = {}
    previous_end = 0

    for block in split_blocks(text):
        between = _free_text(text[previous_end : block.start])
        if between is not None:
            result.entries.append(between)
        previous_end = block.end

        entry_type = block.entry_type.lower()
        is_string_block = entry_type in STRING_BLOCK_TYPES
        if is_string_block:
            result.entries.append(StringEntry(entry_type=block.entry_type, raw=block.text))
            if entry_type == "comment":
                continue
        try:
            if is_string_block:
                macros = _check_block(block, macros)
            else:
                result.entries.append(_parse_block(block, macros))
        except PybtexError as exc:
            result.issues.append(
                BibliographyIssue(
                    message=(
                        f"Failed to parse block at line {block.line}: "
                        f"{exception_hint(exc) or exc}"
                    ),
                    key=None if is_string_block else _block_key(block.body),
                    source=source,
                    line=block.line,
                )
            )
            if not is_string_block:
                result.entries.append(StringEntry(entry_type=block.entry_type, raw=block.text))

    trailing = _free_text(text[previous_end:])
    if trailing is not None:
        result.entries.append(trailing)

    logger.debug(
        "Parsed %d block(s) from %s with %d issue(s).",
        len(result.entries),
        source or "<string>",
        len(result.issues),
    )
    return result


def parse_bibliography_file(path: Path | str) -> ParsedBibliography:
    """Read a UTF-8 ``.bib`` file and parse it."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BibliographyParseError(f"Failed to read '{file_path}': {exc}") from exc
    return parse_bibliography(text, source=file_path)


__all__ = [
    "FREE_TEXT_TYPE",
    "STRING_BLOCK_TYPES",
    "ParsedBibliography",
    "RawBlock",
    "parse_bibliography",
    "parse_bibliography_file",
    "read_fields",
    "split_blocks",
]
