import unittest
from unittest.mock import patch

import config


class TestGetenv(unittest.TestCase):
    @patch.dict("os.environ", {"DB_HOST": "db.example.org"})
    def test_value_from_environment(self):
        self.assertEqual(config.getenv("DB_HOST", "localhost"), "db.example.org")

    @patch.dict("os.environ", {}, clear=True)
    def test_unset_falls_back_to_default(self):
        self.assertEqual(config.getenv("DB_HOST", "localhost"), "localhost")

    @patch.dict("os.environ", {"DB_TABLE_PREFIX": ""})
    def test_empty_falls_back_to_default(self):
        self.assertEqual(config.getenv("DB_TABLE_PREFIX", "wp_"), "wp_")

    def test_default_prefix_is_valid(self):
        self.assertTrue(config.TABLE_PREFIX_PATTERN.fullmatch("wp_"))

    def test_prefix_with_trailing_newline_is_invalid(self):
        self.assertIsNone(config.TABLE_PREFIX_PATTERN.fullmatch("wp_\n"))
