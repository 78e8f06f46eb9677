from __future__ import annotations

from bibsmith.core.config import BibtexFormatConfig, load_format_config
from bibsmith.core.entries import (
    AbbreviationValue,
    ConcatValue,
    Entry,
    Field,
    NumberValue,
    StringEntry,
    TextValue,
)
from bibsmith.core.formatter import (
    field_order_comparator,
    field_to_string,
    format_entry,
    format_string_entry,
    sort_fields,
)


def _config(**options: object) -> BibtexFormatConfig:
    result = load_format_config(options)
    assert not result.issues
    return result.config


def _sample() -> Entry:
    return Entry(
        "article",
        "smith2020",
        [
            Field("title", TextValue("Example")),
            Field("year", NumberValue("2020")),
        ],
    )


def test_text_value_is_wrapped_in_delimiters() -> None:
    assert field_to_string(TextValue("Example"), "  ", _config()) == "{Example}"
    quoted = _config(surround="Quotation marks")
    assert field_to_string(TextValue("Example"), "  ", quoted) == '"Example"'


def test_bare_values_are_verbatim() -> None:
    config = _config()
    assert field_to_string(NumberValue("2020"), "    ", config) == "2020"
    assert field_to_string(AbbreviationValue("jan"), "    ", config) == "jan"


def test_multiline_text_is_reindented() -> None:
    value = TextValue("line1\n      line2")

    assert field_to_string(value, "    ", _config()) == "{line1\n    line2}"


def test_every_line_break_convention_is_split() -> None:
    value = TextValue("a\r\n  b\rc\n\td")

    assert field_to_string(value, "  ", _config()) == "{a\n  b\n  c\n  d}"


def test_empty_prefix_keeps_text_verbatim() -> None:
    value = TextValue("a\r\n    b")

    assert field_to_string(value, "", _config()) == "{a\r\n    b}"


def test_concatenation_joins_parts() -> None:
    value = ConcatValue((NumberValue("1"), TextValue("a")))

    assert field_to_string(value, "  ", _config()) == "1 # {a}"


def test_concatenation_of_three_parts() -> None:
    value = ConcatValue.of([AbbreviationValue("jn"), TextValue("x"), NumberValue("3")])

    assert field_to_string(value, "", _config()) == "jn # {x} # 3"


def test_empty_concatenation_renders_nothing() -> None:
    assert field_to_string(ConcatValue(()), "  ", _config()) == ""


def test_unknown_value_kind_renders_nothing() -> None:
    assert field_to_string(object(), "  ", _config()) == ""  # type: ignore[arg-type]


def test_format_entry_default_layout() -> None:
    assert format_entry(_sample(), _config()) == (
        "@article{smith2020,\n  title = {Example},\n  year = 2020\n}"
    )


def test_format_entry_trailing_comma() -> None:
    rendered = format_entry(_sample(), _config(trailingComma=True))

    assert rendered.endswith("year = 2020,\n}")


def test_format_entry_uses_tab_setting() -> None:
    rendered = format_entry(_sample(), _config(tab="tab"))

    assert "\n\ttitle = {Example}" in rendered


def test_uppercase_field_names() -> None:
    rendered = format_entry(_sample(), _config(case="UPPERCASE"))

    assert "  TITLE = {Example}" in rendered
    assert "  YEAR = 2020" in rendered


def test_lowercase_mode_keeps_names_as_stored() -> None:
    entry = Entry("book", "k", [Field("Title", TextValue("T"))])

    assert "  Title = {T}" in format_entry(entry, _config(case="lowercase"))


def test_alignment_puts_equal_signs_in_one_column() -> None:
    rendered = format_entry(_sample(), _config(alignOnEqual=True))

    lines = rendered.splitlines()
    assert lines[1] == "  title = {Example},"
    assert lines[2] == "  year  = 2020"
    assert lines[1].index("=") == lines[2].index("=")


def test_continuation_indent_follows_the_field_name() -> None:
    entry = Entry(
        "misc",
        "k",
        [
            Field("author", TextValue("Smith, John and\n  Doe, Jane")),
            Field("note", TextValue("first\nsecond")),
        ],
    )

    rendered = format_entry(entry, _config())

    assert "  author = {Smith, John and\n" + " " * 12 + "Doe, Jane}" in rendered
    assert "  note = {first\n" + " " * 10 + "second}" in rendered


def test_continuation_indent_includes_alignment_padding() -> None:
    entry = Entry(
        "misc",
        "k",
        [
            Field("title", TextValue("T")),
            Field("note", TextValue("a\nb")),
        ],
    )

    rendered = format_entry(entry, _config(alignOnEqual=True))

    assert "  note  = {a\n" + " " * 11 + "b}" in rendered


def test_entry_without_key_or_fields() -> None:
    assert format_entry(Entry("misc"), _config()) == "@misc{\n}"


def test_field_order_comparator() -> None:
    fields = [
        Field("author", TextValue("A")),
        Field("title", TextValue("T")),
        Field("year", TextValue("2020")),
    ]

    sort_fields(fields, ["title", "year"])

    assert [field.name for field in fields] == ["title", "year", "author"]


def test_unlisted_fields_are_sorted_by_name() -> None:
    fields = [Field(name, TextValue("")) for name in ("zeta", "year", "title", "author")]

    sort_fields(fields, ["title"])

    assert [field.name for field in fields] == ["title", "author", "year", "zeta"]


def test_field_order_comparator_is_three_way() -> None:
    compare = field_order_comparator(["title", "year"])
    title = Field("title", TextValue(""))
    year = Field("year", TextValue(""))
    author = Field("author", TextValue(""))

    assert compare(title, year) < 0
    assert compare(year, title) > 0
    assert compare(author, title) > 0
    assert compare(title, author) < 0
    assert compare(title, title) == 0


def test_sorting_fields_reorders_the_entry_in_place() -> None:
    entry = Entry(
        "article",
        "k",
        [
            Field("year", TextValue("2020")),
            Field("author", TextValue("A")),
            Field("title", TextValue("T")),
        ],
    )

    rendered = format_entry(entry, _config(sortFields=True, fieldsOrder=["title"]))

    assert [field.name for field in entry.fields] == ["title", "author", "year"]
    assert rendered.index("title") < rendered.index("author") < rendered.index("year")


def test_format_string_entry_returns_source() -> None:
    entry = StringEntry("string", '@string{jn = "Journal"}\n')

    assert format_string_entry(entry) == '@string{jn = "Journal"}'
