"""Collect formatting options from configuration files and CLI flags."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from bibsmith.core.exceptions import ConfigFileError


CONFIG_SECTION = "bibsmith"


def load_config_file(path: Path) -> dict[str, Any]:
    """Return the raw options stored in a YAML configuration file.

    Options may sit at the top level or under a ``bibsmith`` section.
    """
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigFileError(f"Failed to read configuration file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigFileError(f"Invalid YAML in configuration file '{path}': {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigFileError(
            f"Configuration file '{path}' must contain a mapping of options, "
            f"got {type(payload).__name__}."
        )
    section = payload.get(CONFIG_SECTION)
    if isinstance(section, Mapping):
        payload = section
    return {str(key): value for key, value in payload.items()}


def merge_options(
    file_options: Mapping[str, Any],
    overrides: Mapping[str, Any | None],
) -> dict[str, Any]:
    """Overlay CLI overrides on file options, skipping flags left unset."""
    merged = dict(file_options)
    for key, value in overrides.items():
        if value is None:
            continue
        merged[key] = list(value) if isinstance(value, (list, tuple)) else value
    return merged


__all__ = ["CONFIG_SECTION", "load_config_file", "merge_options"]
