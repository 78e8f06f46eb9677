"""Ordering of bibliography entries and duplicate detection.

Architecture
: `build_entry_comparator` composes the pinned entry types of
  `BibtexFormatConfig.first_entries` with the chain of sort keys in
  `BibtexFormatConfig.sort`. The first non-zero result wins.
: Entries that tie on the whole chain are added to a caller-owned duplicate
  set while the comparator runs. Which side of a tie gets recorded depends on
  how the sort algorithm pairs its arguments, so this set is best effort.
: `sort_entries` sorts a collection and follows up with an explicit scan of
  adjacent ties, which yields the exact groups of duplicates.

Recognised sort keys
: `key` compares citation keys. Entries without a key come first.
: `year-desc` compares the `year` field in descending order.
: `type` compares entry types.
: Any other name compares the value of that field with braces removed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
import logging

from .collation import locale_compare
from .config import BibtexFormatConfig
from .entries import BibEntry, Entry, StringEntry
from .formatter import field_to_string


logger = logging.getLogger(__name__)

EntryComparator = Callable[[BibEntry, BibEntry], int]


def compare_first_entries(first_entries: Sequence[str], a: BibEntry, b: BibEntry) -> int:
    """Order entries whose type is pinned before the others.

    Returns 0 when neither or both types share the same pin position.
    """
    a_first = a.entry_type in first_entries
    b_first = b.entry_type in first_entries
    if a_first and not b_first:
        return -1
    if b_first and not a_first:
        return 1
    if a_first and b_first:
        a_index = first_entries.index(a.entry_type)
        b_index = first_entries.index(b.entry_type)
        return (a_index > b_index) - (a_index < b_index)
    return 0


def _citation_key(entry: BibEntry) -> str | None:
    match entry:
        case Entry(key=key):
            return key or None
        case StringEntry():
            return None


def _field_text(name: str, entry: BibEntry, config: BibtexFormatConfig) -> str:
    match entry:
        case Entry():
            found = entry.get(name)
            if found is None:
                return ""
            text = field_to_string(found.value, "", config)
            return text.replace("{", "").replace("}", "")
        case StringEntry():
            return ""


def compare_by_key(a: BibEntry, b: BibEntry) -> int:
    a_key = _citation_key(a)
    b_key = _citation_key(b)
    if a_key is None and b_key is None:
        return 0
    if a_key is None:
        return -1
    if b_key is None:
        return 1
    return locale_compare(a_key, b_key)


def compare_by_type(a: BibEntry, b: BibEntry) -> int:
    return locale_compare(a.entry_type, b.entry_type)


def compare_by_field(
    name: str, a: BibEntry, b: BibEntry, config: BibtexFormatConfig
) -> int:
    """Compare two entries on the plain text of field ``name``."""
    return locale_compare(_field_text(name, a, config), _field_text(name, b, config))


def _compare_on(key: str, a: BibEntry, b: BibEntry, config: BibtexFormatConfig) -> int:
    match key:
        case "key":
            return compare_by_key(a, b)
        case "year-desc":
            return -compare_by_field("year", a, b, config)
        case "type":
            return compare_by_type(a, b)
        case _:
            return compare_by_field(key, a, b, config)


def compare_entries(a: BibEntry, b: BibEntry, config: BibtexFormatConfig) -> int:
    """Three-way comparison of two entries under ``config``, without side effects."""
    result = compare_first_entries(config.first_entries, a, b)
    if result != 0:
        return result
    for key in config.sort:
        result = _compare_on(key, a, b, config)
        if result != 0:
            return result
    return 0


def build_entry_comparator(
    duplicates: set[Entry], config: BibtexFormatConfig
) -> EntryComparator:
    """Return a comparator for ``config`` that records ties into ``duplicates``.

    When two entries tie on every key the first argument is added to the set,
    provided it is a real entry.
    """

    def compare(a: BibEntry, b: BibEntry) -> int:
        result = compare_entries(a, b, config)
        if result == 0 and isinstance(a, Entry):
            duplicates.add(a)
        return result

    return compare


def find_duplicate_groups(
    entries: Sequence[BibEntry], config: BibtexFormatConfig
) -> list[list[Entry]]:
    """Group adjacent real entries of a sorted sequence that compare equal."""
    groups: list[list[Entry]] = []
    current: list[Entry] = []
    for entry in entries:
        if not isinstance(entry, Entry):
            # String definitions never count as duplicates but do not break a run.
            continue
        if current and compare_entries(current[-1], entry, config) == 0:
            current.append(entry)
            continue
        if len(current) > 1:
            groups.append(current)
        current = [entry]
    if len(current) > 1:
        groups.append(current)
    return groups


@dataclass(slots=True)
class SortResult:
    """Sorted entries along with the duplicates detected while sorting."""

    entries: list[BibEntry]
    duplicates: set[Entry] = field(default_factory=set)
    groups: list[list[Entry]] = field(default_factory=list)


def sort_entries(entries: Iterable[BibEntry], config: BibtexFormatConfig) -> SortResult:
    """Stable sort of ``entries`` with exact duplicate groups."""
    duplicates: set[Entry] = set()
    comparator = build_entry_comparator(duplicates, config)
    ordered = sorted(entries, key=cmp_to_key(comparator))
    groups = find_duplicate_groups(ordered, config)
    for group in groups:
        duplicates.update(group)
    logger.debug(
        "Sorted %d entries by %s, %d duplicate group(s).",
        len(ordered),
        ", ".join(config.sort) or "<none>",
        len(groups),
    )
    return SortResult(entries=ordered, duplicates=duplicates, groups=groups)


__all__ = [
    "EntryComparator",
    "SortResult",
    "build_entry_comparator",
    "compare_by_field",
    "compare_by_key",
    "compare_by_type",
    "compare_entries",
    "compare_first_entries",
    "find_duplicate_groups",
    "sort_entries",
]
