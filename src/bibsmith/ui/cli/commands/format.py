"""Implementation of the ``bibsmith format`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from bibsmith.core.config import load_format_config
from bibsmith.core.document import format_bibliography
from bibsmith.core.exceptions import BibsmithError
from bibsmith.core.parsing import parse_bibliography_file

from .._options import (
    AlignOption,
    CaseOption,
    CheckOption,
    ConfigFileOption,
    DuplicatesOption,
    FieldsOrderOption,
    FirstEntriesOption,
    InPlaceOption,
    InputPathArgument,
    SortByOption,
    SortFieldsOption,
    SortOption,
    SurroundOption,
    TabOption,
    TrailingCommaOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_duplicates, present_issues
from ..settings import load_config_file, merge_options
from ..state import emit_error, get_cli_state, render_message


def format_command(
    inputs: InputPathArgument,
    config_file: ConfigFileOption = None,
    tab: TabOption = None,
    surround: SurroundOption = None,
    case: CaseOption = None,
    trailing_comma: TrailingCommaOption = None,
    align: AlignOption = None,
    sort_fields: SortFieldsOption = None,
    fields_order: FieldsOrderOption = None,
    sort: SortOption = None,
    sort_by: SortByOption = None,
    first_entries: FirstEntriesOption = None,
    duplicates: DuplicatesOption = None,
    in_place: InPlaceOption = False,
    check: CheckOption = False,
) -> None:
    """Sort and reformat BibTeX files."""
    state = get_cli_state()
    emitter = CliEmitter(state=state)

    overrides: dict[str, Any] = {
        "tab": tab,
        "surround": surround,
        "case": case,
        "trailingComma": trailing_comma,
        "alignOnEqual": align,
        "sortFields": sort_fields,
        "fieldsOrder": fields_order,
        "sortEntries": sort,
        "sortby": sort_by,
        "firstEntries": first_entries,
        "handleDuplicates": duplicates,
    }
    try:
        file_options = load_config_file(config_file) if config_file is not None else {}
    except BibsmithError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    config = load_format_config(merge_options(file_options, overrides), emitter=emitter).config

    would_change: list[Path] = []
    for path in inputs:
        try:
            parsed = parse_bibliography_file(path)
        except BibsmithError as exc:
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc

        present_issues(state, parsed.issues)
        result = format_bibliography(parsed.entries, config, emitter=emitter)
        if state.verbosity >= 1:
            present_duplicates(state, path, result.duplicates, config)

        original = path.read_text(encoding="utf-8")
        changed = result.text != original
        if check:
            if changed:
                would_change.append(path)
                render_message("warning", f"would reformat {path}")
            continue
        if in_place:
            if changed:
                path.write_text(result.text, encoding="utf-8")
                if state.verbosity >= 1:
                    render_message("info", f"Reformatted {path}")
            continue
        typer.echo(result.text, nl=False)

    if would_change:
        raise typer.Exit(code=1)


__all__ = ["format_command"]
