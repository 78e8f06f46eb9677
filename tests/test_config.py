from __future__ import annotations

import logging

from pydantic import ValidationError
import pytest

from bibsmith.core.config import (
    BibtexFormatConfig,
    load_format_config,
    parse_tab_spec,
)
from bibsmith.core.diagnostics import RecordingEmitter


@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        ("tab", "\t"),
        ("4", "    "),
        ("3 spaces", "   "),
        ("1 spaces", " "),
        ("two", None),
        ("2 space", None),
        (" 2", None),
        ("2 spaces ", None),
        ("", None),
    ],
)
def test_parse_tab_spec(spec: str, expected: str | None) -> None:
    assert parse_tab_spec(spec) == expected


def test_defaults_without_options() -> None:
    result = load_format_config(None)

    assert result.issues == ()
    config = result.config
    assert config.tab == "  "
    assert (config.left, config.right) == ("{", "}")
    assert config.case == "lowercase"
    assert config.trailing_comma is False
    assert config.sort == ("key",)
    assert config.align_on_equal is False
    assert config.sort_fields is False
    assert config.fields_order == ()
    assert config.first_entries == ()
    assert config.sort_entries is False
    assert config.handle_duplicates == "Highlight Duplicates"


def test_options_use_setting_names() -> None:
    result = load_format_config(
        {
            "tab": "tab",
            "surround": "Quotation marks",
            "case": "UPPERCASE",
            "trailingComma": True,
            "sortby": ["year-desc", "key"],
            "alignOnEqual": True,
            "sortFields": True,
            "fieldsOrder": ["title", "year"],
            "firstEntries": ["article"],
            "sortEntries": True,
            "handleDuplicates": "Comment Duplicates",
        }
    )

    assert result.issues == ()
    config = result.config
    assert config.tab == "\t"
    assert (config.left, config.right) == ('"', '"')
    assert config.case == "UPPERCASE"
    assert config.trailing_comma is True
    assert config.sort == ("year-desc", "key")
    assert config.align_on_equal is True
    assert config.sort_fields is True
    assert config.fields_order == ("title", "year")
    assert config.first_entries == ("article",)
    assert config.sort_entries is True
    assert config.handle_duplicates == "Comment Duplicates"


def test_options_accept_attribute_names() -> None:
    config = load_format_config({"trailing_comma": True, "align_on_equal": True}).config

    assert config.trailing_comma is True
    assert config.align_on_equal is True


def test_invalid_tab_falls_back_with_warning() -> None:
    emitter = RecordingEmitter()

    result = load_format_config({"tab": "lots", "case": "UPPERCASE"}, emitter=emitter)

    assert result.config.tab == "  "
    assert result.config.case == "UPPERCASE"
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.option == "tab"
    assert issue.value == "lots"
    assert "Wrong value for tab" in issue.message
    assert "'2 spaces'" in issue.message
    assert emitter.warnings == [issue.message]


def test_zero_spaces_is_rejected() -> None:
    result = load_format_config({"tab": "0 spaces"})

    assert result.config.tab == "  "
    assert [issue.option for issue in result.issues] == ["tab"]


def test_each_invalid_option_is_reported() -> None:
    result = load_format_config(
        {
            "surround": "Square brackets",
            "case": "Title Case",
            "trailingComma": "maybe",
            "sortby": "key",
            "fieldsOrder": ["title"],
        }
    )

    assert {issue.option for issue in result.issues} == {
        "surround",
        "case",
        "trailingComma",
        "sortby",
    }
    config = result.config
    assert config.surround == "Curly braces"
    assert config.case == "lowercase"
    assert config.trailing_comma is False
    assert config.sort == ("key",)
    assert config.fields_order == ("title",)


def test_non_mapping_options_use_defaults() -> None:
    emitter = RecordingEmitter()

    result = load_format_config(["tab"], emitter=emitter)  # type: ignore[arg-type]

    assert result.config == BibtexFormatConfig()
    assert len(result.issues) == 1
    assert "Expected a mapping" in result.issues[0].message
    assert len(emitter.warnings) == 1


def test_unknown_options_are_ignored() -> None:
    result = load_format_config({"colour": "blue"})

    assert result.issues == ()
    assert result.config == BibtexFormatConfig()


def test_resolved_indentation_is_kept() -> None:
    assert BibtexFormatConfig(tab="\t").tab == "\t"
    assert BibtexFormatConfig(tab="   ").tab == "   "
    assert BibtexFormatConfig(tab="4 spaces").tab == "    "


def test_direct_construction_rejects_bad_tab() -> None:
    with pytest.raises(ValidationError):
        BibtexFormatConfig(tab="")


def test_config_is_frozen() -> None:
    config = BibtexFormatConfig()
    with pytest.raises(ValidationError):
        config.tab = "\t"  # type: ignore[misc]


def test_resolved_config_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="bibsmith.core.config"):
        load_format_config({"tab": "tab"})

    assert any("BibTeX format config" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize("spec", ["65", "65 spaces", "100000000000000000000 spaces", "9" * 5000])
def test_parse_tab_spec_rejects_oversized_widths(spec: str) -> None:
    assert parse_tab_spec(spec) is None


def test_parse_tab_spec_accepts_the_largest_width() -> None:
    assert parse_tab_spec("64 spaces") == " " * 64
    assert parse_tab_spec("008") == " " * 8


def test_oversized_tab_falls_back_without_raising() -> None:
    result = load_format_config({"tab": "100000000000000000000 spaces"})

    assert result.config.tab == "  "
    assert [issue.option for issue in result.issues] == ["tab"]
    assert "Setting tab to '2 spaces'." in result.issues[0].message
