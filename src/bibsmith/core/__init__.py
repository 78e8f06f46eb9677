"""Sorting and formatting core for BibTeX databases.

Architecture
: `config` validates raw options into an immutable `BibtexFormatConfig` and
  reports rejected values as `ConfigIssue` records instead of raising.
: `sorting` builds the entry comparator (pinned types, then the sort key
  chain) and finds groups of duplicate entries.
: `formatter` renders one entry at a time: field order, alignment, case,
  delimiters and re-indented multi-line values.
: `document` ties both together for a whole bibliography.
: `parsing` adapts pybtex so `.bib` text can feed the core.

Usage Example

```pycon
>>> from bibsmith.core import Entry, Field, TextValue, format_entry, load_format_config
>>> config = load_format_config({"tab": "4 spaces", "alignOnEqual": True}).config
>>> entry = Entry("article", "doe2023", [
...     Field("title", TextValue("A Minimal Example")),
...     Field("year", TextValue("2023")),
... ])
>>> print(format_entry(entry, config))
@article{doe2023,
    title = {A Minimal Example},
    year  = {2023}
}
```
"""

from __future__ import annotations

from .config import (
    BibtexFormatConfig,
    ConfigIssue,
    FormatConfigResult,
    load_format_config,
    parse_tab_spec,
)
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter, RecordingEmitter
from .document import FormattedBibliography, comment_out, format_bibliography
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
from .exceptions import BibliographyParseError, BibsmithError, ConfigFileError
from .formatter import (
    field_order_comparator,
    field_to_string,
    format_entry,
    format_string_entry,
    sort_fields,
)
from .issues import BibliographyIssue
from .parsing import ParsedBibliography, parse_bibliography, parse_bibliography_file
from .sorting import (
    SortResult,
    build_entry_comparator,
    compare_entries,
    find_duplicate_groups,
    sort_entries,
)


__all__ = [
    "AbbreviationValue",
    "BibEntry",
    "BibliographyIssue",
    "BibliographyParseError",
    "BibsmithError",
    "BibtexFormatConfig",
    "ConcatValue",
    "ConfigFileError",
    "ConfigIssue",
    "DiagnosticEmitter",
    "Entry",
    "Field",
    "FieldValue",
    "FormatConfigResult",
    "FormattedBibliography",
    "LoggingEmitter",
    "NullEmitter",
    "NumberValue",
    "ParsedBibliography",
    "RecordingEmitter",
    "SortResult",
    "StringEntry",
    "TextValue",
    "build_entry_comparator",
    "comment_out",
    "compare_entries",
    "field_order_comparator",
    "field_to_string",
    "find_duplicate_groups",
    "format_bibliography",
    "format_entry",
    "format_string_entry",
    "load_format_config",
    "parse_bibliography",
    "parse_bibliography_file",
    "parse_tab_spec",
    "sort_entries",
    "sort_fields",
]
