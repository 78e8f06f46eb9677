from __future__ import annotations

from bibsmith.core.config import BibtexFormatConfig, load_format_config
from bibsmith.core.diagnostics import RecordingEmitter
from bibsmith.core.document import comment_out, format_bibliography
from bibsmith.core.entries import Entry, Field, StringEntry, TextValue


def _config(**options: object) -> BibtexFormatConfig:
    result = load_format_config(options)
    assert not result.issues
    return result.config


def _entry(key: str | None, entry_type: str = "article") -> Entry:
    return Entry(entry_type, key, [Field("title", TextValue(f"Title {key}"))])


def test_empty_bibliography_renders_nothing() -> None:
    formatted = format_bibliography([], _config())

    assert formatted.text == ""
    assert formatted.entries == ()
    assert formatted.duplicates == ()


def test_entries_keep_their_order_without_sorting() -> None:
    formatted = format_bibliography([_entry("b"), _entry("a")], _config())

    assert formatted.text == (
        "@article{b,\n  title = {Title b}\n}\n\n@article{a,\n  title = {Title a}\n}\n"
    )


def test_unsorted_bibliography_does_not_look_for_duplicates() -> None:
    emitter = RecordingEmitter()

    formatted = format_bibliography([_entry("a"), _entry("a")], _config(), emitter=emitter)

    assert formatted.duplicates == ()
    assert emitter.warnings == []
    assert emitter.events == []


def test_string_entries_pass_through() -> None:
    block = StringEntry("string", '@string{jn = "Journal"}\n')

    formatted = format_bibliography([block, _entry("a")], _config())

    assert formatted.text.startswith('@string{jn = "Journal"}\n\n@article{a,')


def test_sorting_emits_an_event() -> None:
    emitter = RecordingEmitter()
    config = _config(sortEntries=True, sortby=["type", "key"])

    formatted = format_bibliography([_entry("b"), _entry("a")], config, emitter=emitter)

    assert [entry.key for entry in formatted.entries] == ["a", "b"]
    assert emitter.events == [("entries_sorted", {"count": 2, "keys": ["type", "key"]})]


def test_highlighted_duplicates_are_reported() -> None:
    emitter = RecordingEmitter()
    first = _entry("dup")
    second = _entry("dup", "book")
    config = _config(sortEntries=True)

    formatted = format_bibliography([second, _entry("a"), first], config, emitter=emitter)

    assert formatted.duplicates == (first,)
    assert emitter.warnings == ['Duplicate entry "dup".']
    assert "% " not in formatted.text
    assert formatted.text.count("{dup,") == 2


def test_commented_duplicates_are_commented_out() -> None:
    emitter = RecordingEmitter()
    first = _entry("dup")
    second = _entry("dup")
    config = _config(sortEntries=True, handleDuplicates="Comment Duplicates")

    formatted = format_bibliography([first, second], config, emitter=emitter)

    assert formatted.text == (
        "@article{dup,\n  title = {Title dup}\n}\n\n"
        "% @article{dup,\n%   title = {Title dup}\n% }\n"
    )
    assert emitter.warnings == ['Duplicate entry "dup" commented out.']


def test_ignored_duplicates_are_left_alone() -> None:
    emitter = RecordingEmitter()
    config = _config(sortEntries=True, handleDuplicates="Ignore Duplicates")

    formatted = format_bibliography([_entry("dup"), _entry("dup")], config, emitter=emitter)

    assert formatted.duplicates == ()
    assert emitter.warnings == []


def test_duplicate_without_key_is_named() -> None:
    emitter = RecordingEmitter()
    config = _config(sortEntries=True)

    format_bibliography([_entry(None), _entry(None)], config, emitter=emitter)

    assert emitter.warnings == ['Duplicate entry "<no key>".']


def test_comment_out_prefixes_every_line() -> None:
    assert comment_out("a\nb") == "% a\n% b"
