"""Tests for the JSON settings file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from drivetree.settings_models import APP_DIR_ENV, SETTINGS_FILENAME, default_settings_path
from drivetree.settings_store import DriveTreeSettings, SettingsStoreError


class DriveTreeSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "settings.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _load(self) -> DriveTreeSettings:
        settings = DriveTreeSettings(self.path)
        settings.load()
        return settings

    def test_missing_file_loads_defaults_and_is_dirty(self) -> None:
        settings = self._load()

        self.assertFalse(settings.show_hidden)
        self.assertEqual(settings.log_level, logging.WARNING)
        self.assertEqual(settings.window_size, (900, 600))
        self.assertEqual(settings.column_widths, [320, 150, 90, 140])
        self.assertTrue(settings.dirty)
        self.assertIsNone(settings.last_error)

    def test_saved_values_survive_reload(self) -> None:
        settings = self._load()
        settings.show_hidden = True
        settings.window_size = (1024, 700)
        settings.column_widths = [400, 100, 60, 120]
        settings.log_level = "debug"
        settings.save()
        self.assertFalse(settings.dirty)

        reloaded = self._load()
        self.assertTrue(reloaded.show_hidden)
        self.assertEqual(reloaded.window_size, (1024, 700))
        self.assertEqual(reloaded.column_widths, [400, 100, 60, 120])
        self.assertEqual(reloaded.log_level, logging.DEBUG)
        self.assertFalse(reloaded.dirty)

    def test_setting_an_unchanged_value_stays_clean(self) -> None:
        settings = self._load()
        settings.save()
        settings.show_hidden = False
        settings.window_size = (900, 600)
        self.assertFalse(settings.dirty)

    def test_partial_file_is_merged_with_defaults(self) -> None:
        self.path.write_text(json.dumps({"window": {"width": 1200}}), encoding="utf-8")
        settings = self._load()

        self.assertEqual(settings.window_size, (1200, 600))
        self.assertFalse(settings.show_hidden)

    def test_wrongly_typed_values_fall_back_to_defaults(self) -> None:
        self.path.write_text(
            json.dumps({
                "explorer": {"show_hidden": "yes", "column_widths": [0, "wide", 250]},
                "window": {"width": True, "height": -5},
                "logging": {"level": "chatty"},
            }),
            encoding="utf-8",
        )
        settings = self._load()

        self.assertFalse(settings.show_hidden)
        self.assertEqual(settings.column_widths, [250])
        self.assertEqual(settings.window_size, (900, 600))
        self.assertEqual(settings.log_level, logging.WARNING)

    def test_unknown_log_level_is_rejected(self) -> None:
        settings = self._load()
        with self.assertRaises(ValueError):
            settings.log_level = "loud"

    def test_invalid_json_keeps_defaults_and_records_error(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        settings = self._load()

        self.assertIsNotNone(settings.last_error)
        self.assertEqual(settings.window_size, (900, 600))
        self.assertEqual(self.path.read_text(encoding="utf-8"), "{not json")

    def test_non_object_root_is_rejected(self) -> None:
        self.path.write_text("[1, 2]", encoding="utf-8")
        settings = self._load()
        self.assertIn("must be a JSON object", settings.last_error or "")

    def test_save_failure_raises(self) -> None:
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("", encoding="utf-8")
        settings = DriveTreeSettings(blocker / "settings.json")
        settings.load()
        with self.assertRaises(SettingsStoreError):
            settings.save()

    def test_app_dir_env_override(self) -> None:
        with mock.patch.dict(os.environ, {APP_DIR_ENV: self._tmp.name}):
            self.assertEqual(default_settings_path(), Path(self._tmp.name) / SETTINGS_FILENAME)


if __name__ == "__main__":
    unittest.main()
