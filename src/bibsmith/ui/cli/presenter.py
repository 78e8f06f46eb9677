"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich import box
from rich.table import Table
from rich.text import Text

from bibsmith.core.config import BibtexFormatConfig
from bibsmith.core.entries import Entry
from bibsmith.core.formatter import field_to_string
from bibsmith.core.issues import BibliographyIssue

from .state import CLIState


def present_issues(state: CLIState, issues: Sequence[BibliographyIssue]) -> None:
    """Render parse issues as a warning table on stderr."""
    if not issues:
        return
    table = Table(title="Warnings", box=box.SQUARE, header_style="bold cyan", show_edge=True)
    table.add_column("Line", justify="right", style="yellow")
    table.add_column("Key", style="yellow", no_wrap=True)
    table.add_column("Message", style="yellow")
    for issue in issues:
        table.add_row(
            str(issue.line) if issue.line is not None else "-",
            Text(issue.key or "-"),
            Text(issue.message),
        )
    state.err_console.print(table)


def present_duplicates(
    state: CLIState,
    source: Path,
    duplicates: Sequence[Entry],
    config: BibtexFormatConfig,
) -> None:
    """Summarise the duplicate entries found in ``source``."""
    if not duplicates:
        return
    table = Table(
        title=f"Duplicates in {source.name}",
        box=box.SQUARE,
        header_style="bold cyan",
        show_edge=True,
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Type")
    table.add_column("Title", overflow="fold")
    for entry in duplicates:
        title = entry.get("title")
        title_text = field_to_string(title.value, "", config) if title is not None else ""
        table.add_row(Text(entry.key or "-"), Text(entry.entry_type), Text(title_text))
    state.err_console.print(table)


__all__ = ["present_duplicates", "present_issues"]
