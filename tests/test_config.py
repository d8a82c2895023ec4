"""Tests for the defaults configuration file."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from loglens.config import CONFIG_ENV_VAR, ConfigStore


class TestConfigStore(unittest.TestCase):
    """Test loading display defaults from config.json."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.temp_dir.name) / "config.json"
        self.store = ConfigStore(self.config_file)

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, content):
        self.config_file.write_text(content, encoding='utf-8')

    def test_missing_file_gives_no_defaults(self):
        self.assertEqual(self.store.load_defaults(), {})

    def test_valid_settings_are_loaded(self):
        self.write(json.dumps({"show_line_number": True, "trim_space": False}))

        self.assertEqual(self.store.load_defaults(),
                         {"show_line_number": True, "trim_space": False})

    def test_unknown_keys_are_ignored(self):
        self.write(json.dumps({"unescape": True, "theme": "dark"}))

        self.assertEqual(self.store.load_defaults(), {"unescape": True})

    def test_invalid_value_is_skipped_with_warning(self):
        self.write(json.dumps({"unescape": "yes", "trim_space": True}))

        with self.assertLogs('loglens.config', level='WARNING') as logs:
            defaults = self.store.load_defaults()

        self.assertEqual(defaults, {"trim_space": True})
        self.assertIn("unescape", logs.output[0])

    def test_malformed_json_is_ignored_with_warning(self):
        self.write("{not json")

        with self.assertLogs('loglens.config', level='WARNING'):
            self.assertEqual(self.store.load_defaults(), {})

    def test_non_object_is_ignored_with_warning(self):
        self.write("[true, false]")

        with self.assertLogs('loglens.config', level='WARNING'):
            self.assertEqual(self.store.load_defaults(), {})

    def test_defaults_are_cached_until_cleared(self):
        self.write(json.dumps({"unescape": True}))
        self.assertEqual(self.store.load_defaults(), {"unescape": True})

        self.write(json.dumps({"unescape": False}))
        self.assertEqual(self.store.load_defaults(), {"unescape": True})

        self.store.clear_cache()
        self.assertEqual(self.store.load_defaults(), {"unescape": False})

    def test_returned_defaults_are_a_copy(self):
        self.write(json.dumps({"unescape": True}))

        self.store.load_defaults()["unescape"] = False

        self.assertEqual(self.store.load_defaults(), {"unescape": True})

    def test_validate_setting(self):
        self.assertTrue(self.store.validate_setting("trim_space", True))
        self.assertFalse(self.store.validate_setting("trim_space", 1))
        self.assertTrue(self.store.validate_setting("unknown", "anything"))

    def test_env_var_overrides_location(self):
        with patch.dict('os.environ', {CONFIG_ENV_VAR: str(self.config_file)}):
            store = ConfigStore()

        self.assertEqual(store.path, self.config_file)

    def test_default_location_uses_platform_config_dir(self):
        with patch.dict('os.environ', {}, clear=True):
            with patch('loglens.config.platformdirs.user_config_dir',
                       return_value=self.temp_dir.name) as mock_dir:
                store = ConfigStore()

        mock_dir.assert_called_once_with("loglens")
        self.assertEqual(store.path, Path(self.temp_dir.name) / "config.json")


if __name__ == '__main__':
    unittest.main()
