"""Exception hierarchy for the bibliography adapters.

The sorting and formatting core never raises: anomalies degrade to empty
values. These exceptions are reserved for the I/O facing layers.
"""

from __future__ import annotations


class BibsmithError(RuntimeError):
    """Base exception for bibsmith failures."""


class BibliographyParseError(BibsmithError):
    """Raised when a bibliography source cannot be read."""


class ConfigFileError(BibsmithError):
    """Raised when a configuration file cannot be loaded."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BibliographyParseError",
    "BibsmithError",
    "ConfigFileError",
    "exception_hint",
    "exception_messages",
]
