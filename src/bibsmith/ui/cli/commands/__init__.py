"""CLI command implementations."""

from __future__ import annotations

from .format import format_command


__all__ = ["format_command"]
