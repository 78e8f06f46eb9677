"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
LAYOUT_PANEL = "Layout"
SORTING_PANEL = "Sorting"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="FILE...",
        help="BibTeX files (.bib) to format.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file holding formatting options (tab, surround, sortby, ...).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

TabOption = Annotated[
    str | None,
    typer.Option(
        "--tab",
        help="Field indentation: 'tab', '<N>' or '<N> spaces'.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

SurroundOption = Annotated[
    str | None,
    typer.Option(
        "--surround",
        help="Delimiters of text values: 'Curly braces' or 'Quotation marks'.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

CaseOption = Annotated[
    str | None,
    typer.Option(
        "--case",
        help="Field name case: 'UPPERCASE' or 'lowercase' (keeps names as written).",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

TrailingCommaOption = Annotated[
    bool | None,
    typer.Option(
        "--trailing-comma/--no-trailing-comma",
        help="Add a comma after the last field of every entry.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

AlignOption = Annotated[
    bool | None,
    typer.Option(
        "--align/--no-align",
        help="Align the '=' signs of the fields of each entry.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

SortFieldsOption = Annotated[
    bool | None,
    typer.Option(
        "--sort-fields/--no-sort-fields",
        help="Reorder fields following --fields-order, then alphabetically.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

FieldsOrderOption = Annotated[
    list[str] | None,
    typer.Option(
        "--fields-order",
        help="Field placed first when sorting fields. Repeat to list several.",
        rich_help_panel=LAYOUT_PANEL,
    ),
]

SortOption = Annotated[
    bool | None,
    typer.Option(
        "--sort/--no-sort",
        help="Sort the entries of each file.",
        rich_help_panel=SORTING_PANEL,
    ),
]

SortByOption = Annotated[
    list[str] | None,
    typer.Option(
        "--sort-by",
        help="Sort key: 'key', 'year-desc', 'type' or a field name. Repeat to chain keys.",
        rich_help_panel=SORTING_PANEL,
    ),
]

FirstEntriesOption = Annotated[
    list[str] | None,
    typer.Option(
        "--first-entry",
        help="Entry type kept at the top when sorting. Repeat to list several.",
        rich_help_panel=SORTING_PANEL,
    ),
]

DuplicatesOption = Annotated[
    str | None,
    typer.Option(
        "--duplicates",
        help=(
            "Duplicate handling when sorting: 'Ignore Duplicates', "
            "'Highlight Duplicates' or 'Comment Duplicates'."
        ),
        rich_help_panel=SORTING_PANEL,
    ),
]

InPlaceOption = Annotated[
    bool,
    typer.Option(
        "--in-place",
        "-i",
        help="Rewrite the input files instead of printing to stdout.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

CheckOption = Annotated[
    bool,
    typer.Option(
        "--check",
        help="Do not write anything; exit with status 1 when a file would change.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic output. Repeat for more detail.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on unexpected errors.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
