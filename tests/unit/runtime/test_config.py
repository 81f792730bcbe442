"""Tests for config persistence and input sanitization.

Validates style, theme, and pane-width keys. Ensures malformed config data
is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from splitview.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("splitview.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_missing_file_loads_empty(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertIsNone(config.load_style_name())
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_left_pane_percent())

    def test_style_and_theme_round_trip_under_separate_keys(self) -> None:
        config.save_style_name(" monokai ")
        config.save_theme_name("ocean")
        config.save_style_name("   ")

        self.assertEqual(config.load_style_name(), "monokai")
        self.assertEqual(config.load_theme_name(), "ocean")
        self.assertEqual(config.load_config(), {"style": "monokai", "theme": "ocean"})

    def test_left_pane_percent_is_clamped_and_rounded(self) -> None:
        config.save_left_pane_percent(90, 29)
        self.assertEqual(config.load_left_pane_percent(), 32.22)

        config.save_left_pane_percent(100, 0)
        self.assertEqual(config.load_left_pane_percent(), 1.0)

        config.save_left_pane_percent(0, 10)
        self.assertEqual(config.load_left_pane_percent(), 1.0)

    def test_malformed_values_are_ignored(self) -> None:
        for data in ({"left_pane_percent": True}, {"left_pane_percent": 100}, {"left_pane_percent": "30"}):
            with self.subTest(data=data):
                config.save_config(data)
                self.assertIsNone(config.load_left_pane_percent())

        config.save_config({"style": 3, "theme": ""})
        self.assertIsNone(config.load_style_name())
        self.assertIsNone(config.load_theme_name())

    def test_non_object_or_invalid_json_loads_empty(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text("[1, 2]\n", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.config_path.write_text("{broken", encoding="utf-8")
        self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
