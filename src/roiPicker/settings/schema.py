"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import COPY_FEEDBACK_MS, DISPLAY_PRECISION, EXPORT_JSON_INDENT, OVERLAY_COLOR

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "roiPicker/settings.schema.json",
    "type": "object",
    "required": ["schema", "ui", "export"],
    "properties": {
        "schema": {"const": "roiPicker/settings@1"},
        "last_open_dir": {"type": ["string", "null"]},
        "ui": {
            "type": "object",
            "properties": {
                "start_in_selection_mode": {"type": "boolean"},
                "overlay_color": {
                    "type": "string",
                    "pattern": "^#[0-9a-fA-F]{6}$",
                },
                "copy_feedback_ms": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": True,
        },
        "export": {
            "type": "object",
            "properties": {
                "indent": {"type": "integer", "minimum": 0, "maximum": 8},
                "display_precision": {"type": "integer", "minimum": 0, "maximum": 10},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "roiPicker/settings@1",
    "last_open_dir": None,
    "ui": {
        "start_in_selection_mode": False,
        "overlay_color": OVERLAY_COLOR,
        "copy_feedback_ms": COPY_FEEDBACK_MS,
    },
    "export": {
        "indent": EXPORT_JSON_INDENT,
        "display_precision": DISPLAY_PRECISION,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

# Sections merged key by key so a partial file keeps the remaining defaults.
_SECTIONS = ("ui", "export")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Overlay *data* on :data:`DEFAULT_SETTINGS` and validate the result.

    Raises :class:`jsonschema.ValidationError` when the merged document is
    not acceptable.
    """

    merged = deepcopy(DEFAULT_SETTINGS)
    for key, value in (data or {}).items():
        if key in _SECTIONS and isinstance(value, dict):
            merged[key].update(value)
        elif key == "last_open_dir":
            merged[key] = os.fspath(value) if isinstance(value, os.PathLike) else value or None
        else:
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
