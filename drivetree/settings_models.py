from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, TypedDict

SETTINGS_FILENAME = "drivetree-settings.json"
APP_DIR_ENV = "DRIVETREE_APP_DIR"
APP_DIRNAME = ".drivetree"


class ExplorerSettings(TypedDict, total=False):
    show_hidden: bool
    column_widths: list[int]


class WindowSettings(TypedDict, total=False):
    width: int
    height: int


class LoggingSettings(TypedDict, total=False):
    level: str


class AppSettings(TypedDict, total=False):
    explorer: ExplorerSettings
    window: WindowSettings
    logging: LoggingSettings


_DEFAULT_SETTINGS: AppSettings = {
    "explorer": {
        "show_hidden": False,
        "column_widths": [320, 150, 90, 140],
    },
    "window": {
        "width": 900,
        "height": 600,
    },
    "logging": {
        "level": "WARNING",
    },
}


def default_settings() -> dict[str, Any]:
    return deepcopy(dict(_DEFAULT_SETTINGS))


def default_app_dir() -> Path:
    override = os.environ.get(APP_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / APP_DIRNAME


def default_settings_path() -> Path:
    return default_app_dir() / SETTINGS_FILENAME
