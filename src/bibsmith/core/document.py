"""Format a whole bibliography: optional sorting, duplicate handling, rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging

from .config import BibtexFormatConfig
from .diagnostics import DiagnosticEmitter, NullEmitter
from .entries import BibEntry, Entry, StringEntry
from .formatter import format_entry, format_string_entry
from .sorting import sort_entries


logger = logging.getLogger(__name__)

COMMENT_PREFIX = "% "


@dataclass(frozen=True, slots=True)
class FormattedBibliography:
    """Rendered text with the emitted entry order and the flagged duplicates."""

    text: str
    entries: tuple[BibEntry, ...] = ()
    duplicates: tuple[Entry, ...] = ()


def comment_out(text: str) -> str:
    """Prefix every line of ``text`` with a BibTeX comment marker."""
    return "\n".join(COMMENT_PREFIX + line for line in text.split("\n"))


def _render(entry: BibEntry, config: BibtexFormatConfig) -> str:
    match entry:
        case Entry():
            return format_entry(entry, config)
        case StringEntry():
            return format_string_entry(entry)


def format_bibliography(
    entries: Iterable[BibEntry],
    config: BibtexFormatConfig,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> FormattedBibliography:
    """Render ``entries`` as one BibTeX document.

    Duplicates are only detected when ``config.sort_entries`` is set. The
    first entry of each group of ties is kept as is; the others are reported
    or commented out according to ``config.handle_duplicates``.
    """
    emitter = emitter or NullEmitter()
    ordered = list(entries)
    flagged: list[Entry] = []
    if config.sort_entries:
        result = sort_entries(ordered, config)
        ordered = result.entries
        emitter.event("entries_sorted", {"count": len(ordered), "keys": list(config.sort)})
        if config.handle_duplicates != "Ignore Duplicates":
            for group in result.groups:
                flagged.extend(group[1:])

    commented = config.handle_duplicates == "Comment Duplicates"
    flagged_ids = {id(entry) for entry in flagged}
    blocks: list[str] = []
    for entry in ordered:
        rendered = _render(entry, config)
        if id(entry) in flagged_ids and commented:
            rendered = comment_out(rendered)
        blocks.append(rendered)

    suffix = " commented out." if commented else "."
    for duplicate in flagged:
        logger.debug("Duplicate entry %s (%s).", duplicate.key, duplicate.entry_type)
        emitter.warning(f'Duplicate entry "{duplicate.key or "<no key>"}"{suffix}')

    text = "\n\n".join(blocks) + "\n" if blocks else ""
    return FormattedBibliography(text=text, entries=tuple(ordered), duplicates=tuple(flagged))


__all__ = ["COMMENT_PREFIX", "FormattedBibliography", "comment_out", "format_bibliography"]
