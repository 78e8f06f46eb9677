"""Formatting options shared by the sorting and rendering layers.

BibtexFormatConfig

`tab` (`str`)
: Indentation placed before every field. Accepts `"tab"` for a tab character,
  or `"<N>"` / `"<N> spaces"` for N spaces, up to 64. Defaults to two spaces.

`surround` (`"Curly braces" | "Quotation marks"`)
: Delimiters wrapped around text values. Exposed as `left` and `right`.

`case` (`"UPPERCASE" | "lowercase"`)
: Field name case. `lowercase` keeps names exactly as stored.

`trailingComma` (`bool`)
: Emit a comma after the last field.

`sortby` (`list[str]`)
: Sort keys applied left to right: `key`, `year-desc`, `type`, or any field
  name.

`alignOnEqual` (`bool`)
: Pad field names so that the `=` signs of an entry line up.

`sortFields` (`bool`)
: Reorder fields inside each entry following `fieldsOrder`.

`fieldsOrder` (`list[str]`)
: Field names placed first, in this order. Other fields follow alphabetically.

`firstEntries` (`list[str]`)
: Entry types pinned to the top of a sorted bibliography, in this order.

`sortEntries` (`bool`)
: Sort the entries of a bibliography before rendering it.

`handleDuplicates` (`"Ignore Duplicates" | "Highlight Duplicates" | "Comment Duplicates"`)
: What to do with entries that tie on every sort key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .diagnostics import DiagnosticEmitter, NullEmitter


logger = logging.getLogger(__name__)

DEFAULT_TAB = "  "
DEFAULT_TAB_SPEC = "2 spaces"
MAX_TAB_WIDTH = 64

_TAB_SPEC = re.compile(r"(\d+)( spaces)?")

SurroundStyle = Literal["Curly braces", "Quotation marks"]
FieldCase = Literal["UPPERCASE", "lowercase"]
DuplicatePolicy = Literal["Ignore Duplicates", "Highlight Duplicates", "Comment Duplicates"]

_DELIMITERS: dict[str, tuple[str, str]] = {
    "Curly braces": ("{", "}"),
    "Quotation marks": ('"', '"'),
}


def parse_tab_spec(spec: str) -> str | None:
    """Translate a textual indentation spec into the indentation string.

    Returns ``None`` when the spec is neither ``"tab"`` nor a space count of
    at most ``MAX_TAB_WIDTH``.
    """
    if spec == "tab":
        return "\t"
    match = _TAB_SPEC.fullmatch(spec)
    if match is None:
        return None
    digits = match.group(1).lstrip("0")
    if len(digits) > len(str(MAX_TAB_WIDTH)) or int(digits or "0") > MAX_TAB_WIDTH:
        return None
    return " " * int(digits or "0")


class BibtexFormatConfig(BaseModel):
    """Resolved formatting options."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    tab: str = DEFAULT_TAB
    surround: SurroundStyle = "Curly braces"
    case: FieldCase = "lowercase"
    trailing_comma: bool = Field(default=False, alias="trailingComma")
    sort: tuple[str, ...] = Field(default=("key",), alias="sortby")
    align_on_equal: bool = Field(default=False, alias="alignOnEqual")
    sort_fields: bool = Field(default=False, alias="sortFields")
    fields_order: tuple[str, ...] = Field(default=(), alias="fieldsOrder")
    first_entries: tuple[str, ...] = Field(default=(), alias="firstEntries")
    sort_entries: bool = Field(default=False, alias="sortEntries")
    handle_duplicates: DuplicatePolicy = Field(
        default="Highlight Duplicates", alias="handleDuplicates"
    )

    @field_validator("tab", mode="before")
    @classmethod
    def _resolve_tab(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("expected 'tab' or a number of spaces such as '4 spaces'")
        # Already resolved indentation is kept as is.
        if value == "\t" or (value and not value.strip(" ")):
            return value
        resolved = parse_tab_spec(value)
        if not resolved:
            raise ValueError("expected 'tab' or a positive number of spaces such as '4 spaces'")
        return resolved

    @property
    def left(self) -> str:
        return _DELIMITERS[self.surround][0]

    @property
    def right(self) -> str:
        return _DELIMITERS[self.surround][1]


@dataclass(frozen=True, slots=True)
class ConfigIssue:
    """An option that was rejected and replaced by its default."""

    option: str
    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class FormatConfigResult:
    """Configuration resolved by :func:`load_format_config` with its issues."""

    config: BibtexFormatConfig
    issues: tuple[ConfigIssue, ...] = ()


def _option_names() -> dict[str, tuple[str, ...]]:
    names: dict[str, tuple[str, ...]] = {}
    for name, info in BibtexFormatConfig.model_fields.items():
        aliases = (name,) if info.alias in (None, name) else (name, info.alias)
        for alias in aliases:
            names[alias] = aliases
    return names


def _describe_default(option: str) -> str:
    if option == "tab":
        return repr(DEFAULT_TAB_SPEC)
    names = _option_names().get(option, (option,))
    default = BibtexFormatConfig.model_fields[names[0]].default
    if isinstance(default, tuple):
        default = list(default)
    return repr(default)


def load_format_config(
    options: Mapping[str, Any] | None,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> FormatConfigResult:
    """Validate raw option values, replacing invalid ones with their defaults.

    Never raises: each rejected option is reported as a :class:`ConfigIssue`
    in the result and, when ``emitter`` is provided, as a warning.
    """
    issues: list[ConfigIssue] = []
    payload: dict[str, Any]
    if options is None:
        payload = {}
    elif isinstance(options, Mapping):
        payload = {str(key): value for key, value in options.items()}
    else:
        payload = {}
        issues.append(
            ConfigIssue(
                option="<options>",
                value=options,
                message=(
                    f"Expected a mapping of formatting options, got {type(options).__name__}. "
                    "Using default settings."
                ),
            )
        )

    known = _option_names()
    config: BibtexFormatConfig | None = None
    while config is None:
        try:
            config = BibtexFormatConfig.model_validate(payload)
        except ValidationError as exc:
            rejected = False
            for error in exc.errors():
                location = error.get("loc") or ()
                option = str(location[0]) if location else ""
                for candidate in known.get(option, (option,)):
                    if candidate not in payload:
                        continue
                    value = payload.pop(candidate)
                    rejected = True
                    issues.append(
                        ConfigIssue(
                            option=candidate,
                            value=value,
                            message=(
                                f"Wrong value for {candidate}: {value!r} ({error['msg']}). "
                                f"Setting {candidate} to {_describe_default(candidate)}."
                            ),
                        )
                    )
            if not rejected:  # pragma: no cover - every error is tied to an option
                config = BibtexFormatConfig()

    emitter = emitter or NullEmitter()
    for issue in issues:
        emitter.warning(issue.message)
    logger.debug("BibTeX format config: %s", config.model_dump_json(by_alias=True))
    return FormatConfigResult(config=config, issues=tuple(issues))


__all__ = [
    "DEFAULT_TAB",
    "DEFAULT_TAB_SPEC",
    "MAX_TAB_WIDTH",
    "BibtexFormatConfig",
    "ConfigIssue",
    "DuplicatePolicy",
    "FieldCase",
    "FormatConfigResult",
    "SurroundStyle",
    "load_format_config",
    "parse_tab_spec",
]
