"""JSON-backed application settings with typed accessors."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

from drivetree.settings_models import default_settings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsStoreError(RuntimeError):
    """Raised when a settings file cannot be saved."""


def _merge_defaults(data: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(defaults)
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


class DriveTreeSettings:
    """Settings file for the tree window.

    A missing or unreadable file yields defaults; ``last_error`` records why
    the file was not used. Values with the wrong type fall back to defaults
    when read.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._defaults = default_settings()
        self._data: dict[str, Any] = deepcopy(self._defaults)
        self.dirty = False
        self.last_error: str | None = None

    def load(self) -> None:
        self.last_error = None
        self.dirty = False
        if not self.path.exists():
            self._data = deepcopy(self._defaults)
            self.dirty = True
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            # Keep the invalid file untouched; run on defaults.
            self.last_error = str(exc)
            raw = {}
        if not isinstance(raw, dict):
            self.last_error = f"Settings root in '{self.path}' must be a JSON object, found {type(raw).__name__}."
            raw = {}
        self._data = _merge_defaults(raw, self._defaults)

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError(f"Could not write settings file '{self.path}': {exc}") from exc
        self.dirty = False
        self.last_error = None

    # ---------- Typed accessors ----------

    @property
    def show_hidden(self) -> bool:
        value = self._value("explorer", "show_hidden")
        return value if isinstance(value, bool) else self._defaults["explorer"]["show_hidden"]

    @show_hidden.setter
    def show_hidden(self, value: bool) -> None:
        self._put("explorer", "show_hidden", bool(value))

    @property
    def column_widths(self) -> list[int]:
        value = self._value("explorer", "column_widths")
        if not isinstance(value, list):
            return list(self._defaults["explorer"]["column_widths"])
        return [int(w) for w in value if isinstance(w, int) and not isinstance(w, bool) and w > 0]

    @column_widths.setter
    def column_widths(self, widths: list[int]) -> None:
        self._put("explorer", "column_widths", [int(w) for w in widths])

    @property
    def window_size(self) -> tuple[int, int]:
        size = []
        for key in ("width", "height"):
            value = self._value("window", key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                value = self._defaults["window"][key]
            size.append(value)
        return size[0], size[1]

    @window_size.setter
    def window_size(self, size: tuple[int, int]) -> None:
        width, height = size
        self._put("window", "width", int(width))
        self._put("window", "height", int(height))

    @property
    def log_level(self) -> int:
        name = str(self._value("logging", "level") or "").strip().upper()
        if name not in _LOG_LEVELS:
            name = self._defaults["logging"]["level"]
        return logging.getLevelName(name)

    @log_level.setter
    def log_level(self, level: int | str) -> None:
        name = logging.getLevelName(level) if isinstance(level, int) else str(level).strip().upper()
        if name not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")
        self._put("logging", "level", name)

    def _value(self, section: str, key: str) -> Any:
        values = self._data.get(section)
        return values.get(key) if isinstance(values, dict) else None

    def _put(self, section: str, key: str, value: Any) -> None:
        values = self._data.get(section)
        if not isinstance(values, dict):
            values = {}
            self._data[section] = values
        if values.get(key) != value:
            values[key] = value
            self.dirty = True
