"""Persisted viewer preferences backed by a validated JSON document."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, QStandardPaths, Signal

from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults

_MISSING = object()


def default_settings_path() -> Path:
    """Return ``roiPicker/settings.json`` under the platform config directory."""

    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
    return Path(base or Path.home() / ".config") / "roiPicker" / "settings.json"


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _assign(data: dict[str, Any], dotted: str, value: Any) -> None:
    *parents, leaf = dotted.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


class SettingsManager(QObject):
    """Own the settings document and announce every accepted change.

    ``settingsChanged(key, value)`` fires after the new value has been written
    to disk.  Rejected values raise :class:`SettingsValidationError` and leave
    both the in-memory document and the file untouched.
    """

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_settings_path()
        return self._path

    def load(self) -> None:
        """Read the file (if any), fill in defaults and write the result back."""

        try:
            self._data = merge_with_defaults(self._read_payload())
        except ValidationError as exc:
            raise SettingsValidationError(f"{self.path}: {exc.message}") from exc
        write_json(self.path, self._data)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value stored under the dotted *key*, or *default*."""

        value = _lookup(self._data, key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        if isinstance(value, Path):
            value = str(value)
        candidate = deepcopy(self._data)
        _assign(candidate, key, value)
        try:
            accepted = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc
        write_json(self.path, accepted)
        self._data = accepted
        self.settingsChanged.emit(key, value)

    def export_options(self) -> dict[str, int]:
        """Return the keyword arguments for :class:`~roiPicker.core.export.ExportFormatter`."""

        return {
            "indent": int(self.get("export.indent")),
            "precision": int(self.get("export.display_precision")),
        }

    def _read_payload(self) -> dict[str, Any] | None:
        path = self.path
        if not path.exists():
            return None
        try:
            payload = read_json(path)
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsLoadError(f"{path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise SettingsLoadError(f"{path}: expected a JSON object")
        return payload


__all__ = ["SettingsManager", "default_settings_path"]
