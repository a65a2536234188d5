from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazypick import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_or_malformed_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazypick.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_height(), 12)

                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_save_preferences_round_trips_theme_and_height(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazypick.config.CONFIG_PATH", config_path):
                config.save_preferences(" ocean ", 10)

                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(config.load_height(), 10)

    def test_invalid_height_values_are_ignored(self) -> None:
        self.assertIsNone(config.coerce_height(True))
        self.assertIsNone(config.coerce_height("12"))
        self.assertIsNone(config.coerce_height(3))
        self.assertIsNone(config.coerce_height(500))
        self.assertIsNone(config.coerce_height(13))
        self.assertEqual(config.coerce_height(12), 12)
        self.assertEqual(config.coerce_height(8), 8)

        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"height": 2, "theme": 7}', encoding="utf-8")
            with mock.patch("lazypick.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_height(), 12)
                self.assertIsNone(config.load_theme_name())

    def test_save_preferences_keeps_existing_values_for_unset_options(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"theme": "ocean", "height": 16}', encoding="utf-8")
            with mock.patch("lazypick.config.CONFIG_PATH", config_path):
                config.save_preferences(None, None)

                self.assertEqual(config.load_config(), {"theme": "ocean", "height": 16})


if __name__ == "__main__":
    unittest.main()
