"""Primary public API for bibsmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from bibsmith.core import (
    AbbreviationValue,
    BibEntry,
    BibliographyIssue,
    BibtexFormatConfig,
    ConcatValue,
    ConfigIssue,
    Entry,
    Field,
    FieldValue,
    FormatConfigResult,
    FormattedBibliography,
    NumberValue,
    SortResult,
    StringEntry,
    TextValue,
    build_entry_comparator,
    field_to_string,
    format_bibliography,
    format_entry,
    load_format_config,
    parse_bibliography,
    parse_bibliography_file,
    sort_entries,
)


try:
    __version__ = _pkg_version("bibsmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AbbreviationValue",
    "BibEntry",
    "BibliographyIssue",
    "BibtexFormatConfig",
    "ConcatValue",
    "ConfigIssue",
    "Entry",
    "Field",
    "FieldValue",
    "FormatConfigResult",
    "FormattedBibliography",
    "NumberValue",
    "SortResult",
    "StringEntry",
    "TextValue",
    "__version__",
    "build_entry_comparator",
    "field_to_string",
    "format_bibliography",
    "format_entry",
    "load_format_config",
    "parse_bibliography",
    "parse_bibliography_file",
    "sort_entries",
]
