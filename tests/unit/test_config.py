"""Tests for config persistence and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydlc import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_flags_round_trip_under_distinct_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydlc.config.CONFIG_PATH", config_path):
                self.assertFalse(config.load_full_scan())
                config.save_full_scan(True)
                config.save_strict_catalog_load(False)

                saved = config.load_config()
                self.assertIs(saved.get("full_scan"), True)
                self.assertIs(saved.get("strict_catalog_load"), False)
                self.assertTrue(config.load_full_scan())
                self.assertFalse(config.load_strict_catalog_load())

    def test_non_boolean_flags_fall_back_to_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydlc.config.CONFIG_PATH", config_path):
                config.save_config({"full_scan": "yes", "strict_catalog_load": 1})
                self.assertFalse(config.load_full_scan())
                self.assertFalse(config.load_strict_catalog_load())

    def test_malformed_config_reads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2", encoding="utf-8")
            with mock.patch("lazydlc.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_theme_name_is_stripped_and_blank_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydlc.config.CONFIG_PATH", config_path):
                self.assertIsNone(config.load_theme_name())
                config.save_theme_name("  ocean ")
                config.save_theme_name("   ")
                self.assertEqual(config.load_theme_name(), "ocean")

    def test_games_dir_override_and_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydlc.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_games_dir(), config.DEFAULT_GAMES_DIR)
                config.save_games_dir(Path(tmp) / "games")
                self.assertEqual(config.load_games_dir(), Path(tmp) / "games")
                config.save_config({"games_dir": 7})
                self.assertEqual(config.load_games_dir(), config.DEFAULT_GAMES_DIR)

    def test_save_config_ignores_unwritable_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("lazydlc.config.CONFIG_PATH", blocker / "config.json"):
                config.save_full_scan(True)
                self.assertFalse(config.load_full_scan())


if __name__ == "__main__":
    unittest.main()
