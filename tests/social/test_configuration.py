import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch
from quipfeed_common.configuration.configuration import (
    Configuration, MASKED_VALUE, parse_bool_string)
from quipfeed_common.configuration.configuration_setup import (
    ConfigItemDataType, ConfigurationSetup, ConfigurationSetupItem)
from configuration_layout import CONFIGURATION_LAYOUT, DEFAULT_JOKES_ENDPOINT


def make_layout():
    return ConfigurationSetup({
        "general": [
            ConfigurationSetupItem("name", ConfigItemDataType.STRING,
                                   default_value="quip"),
            ConfigurationSetupItem("count", ConfigItemDataType.INT,
                                   default_value=3),
            ConfigurationSetupItem("size", ConfigItemDataType.UNSIGNED_INT,
                                   default_value=1),
            ConfigurationSetupItem("ratio", ConfigItemDataType.FLOAT,
                                   default_value=0.5),
            ConfigurationSetupItem("enabled", ConfigItemDataType.BOOLEAN,
                                   default_value=False),
            ConfigurationSetupItem("mode", ConfigItemDataType.STRING,
                                   valid_values=["fast", "slow"],
                                   default_value="fast"),
        ],
        "secrets": [
            ConfigurationSetupItem("token", ConfigItemDataType.STRING,
                                   is_required=True, is_secret=True),
        ],
    })


class TestParseBoolString(unittest.TestCase):
    def test_known_values(self):
        self.assertTrue(parse_bool_string(" Yes "))
        self.assertTrue(parse_bool_string("1"))
        self.assertFalse(parse_bool_string("off"))
        self.assertFalse(parse_bool_string("FALSE"))

    def test_unknown_value(self):
        self.assertIsNone(parse_bool_string("maybe"))


class TestConfiguration(unittest.TestCase):

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc"}, clear=True)
    def test_defaults_used_when_no_source(self):
        cfg = Configuration()
        cfg.configure(make_layout())
        cfg.process_config()

        self.assertEqual(cfg.get_entry("general", "name"), "quip")
        self.assertEqual(cfg.get_entry("general", "count"), 3)
        self.assertEqual(cfg.get_entry("general", "ratio"), 0.5)
        self.assertFalse(cfg.get_entry("general", "enabled"))
        self.assertEqual(cfg.get_entry("secrets", "token"), "abc")

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc",
                             "GENERAL_COUNT": "-7",
                             "GENERAL_RATIO": "2.5",
                             "GENERAL_ENABLED": "on",
                             "GENERAL_MODE": "slow"}, clear=True)
    def test_environment_values_are_converted(self):
        cfg = Configuration()
        cfg.configure(make_layout())
        cfg.process_config()

        self.assertEqual(cfg.get_entry("general", "count"), -7)
        self.assertEqual(cfg.get_entry("general", "ratio"), 2.5)
        self.assertTrue(cfg.get_entry("general", "enabled"))
        self.assertEqual(cfg.get_entry("general", "mode"), "slow")

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_required_item_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout())

        with self.assertRaises(ValueError) as ctx:
            cfg.process_config()

        self.assertIn("secrets::token", str(ctx.exception))

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc",
                             "GENERAL_SIZE": "-1"}, clear=True)
    def test_negative_unsigned_int_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout())

        with self.assertRaises(ValueError):
            cfg.process_config()

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc",
                             "GENERAL_ENABLED": "perhaps"}, clear=True)
    def test_invalid_boolean_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout())

        with self.assertRaises(ValueError):
            cfg.process_config()

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc",
                             "GENERAL_MODE": "medium"}, clear=True)
    def test_value_outside_valid_values_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout())

        with self.assertRaises(ValueError) as ctx:
            cfg.process_config()

        self.assertIn("expected one of", str(ctx.exception))

    @patch.dict(os.environ, {"GENERAL_NAME": "from-env"}, clear=True)
    def test_file_values_and_environment_precedence(self):
        contents = textwrap.dedent("""
            [general]
            name = from-file
            count = 42

            [secrets]
            token = file-token
            """)

        with tempfile.NamedTemporaryFile("w", suffix=".ini",
                                         delete=False) as handle:
            handle.write(contents)
            path = handle.name

        try:
            cfg = Configuration()
            cfg.configure(make_layout(), path, True)
            cfg.process_config()
        finally:
            os.unlink(path)

        self.assertEqual(cfg.get_entry("general", "name"), "from-env")
        self.assertEqual(cfg.get_entry("general", "count"), 42)
        self.assertEqual(cfg.get_entry("secrets", "token"), "file-token")

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc"}, clear=True)
    def test_required_file_missing_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout(), "/nonexistent/quipfeed.ini", True)

        with self.assertRaises(ValueError):
            cfg.process_config()

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc"}, clear=True)
    def test_optional_file_missing_is_ignored(self):
        cfg = Configuration()
        cfg.configure(make_layout(), "/nonexistent/quipfeed.ini", False)
        cfg.process_config()

        self.assertEqual(cfg.get_entry("general", "name"), "quip")

    def test_process_without_layout_raises(self):
        with self.assertRaises(RuntimeError):
            Configuration().process_config()

    def test_configure_with_none_layout_raises(self):
        with self.assertRaises(ValueError):
            Configuration().configure(None)

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc"}, clear=True)
    def test_unknown_entry_raises(self):
        cfg = Configuration()
        cfg.configure(make_layout())
        cfg.process_config()

        with self.assertRaises(ValueError):
            cfg.get_entry("general", "missing")

    @patch.dict(os.environ, {"SECRETS_TOKEN": "abc"}, clear=True)
    def test_secret_values_are_masked_for_display(self):
        cfg = Configuration()
        cfg.configure(make_layout())
        cfg.process_config()

        self.assertEqual(cfg.get_display_value("secrets", "token"),
                         MASKED_VALUE)
        self.assertEqual(cfg.get_display_value("general", "name"), "quip")


class TestServiceConfigurationLayout(unittest.TestCase):

    @patch.dict(os.environ, {"JWT_SECRET": "s3cret"}, clear=True)
    def test_layout_defaults(self):
        cfg = Configuration()
        cfg.configure(CONFIGURATION_LAYOUT)
        cfg.process_config()

        self.assertEqual(cfg.get_entry("logging", "log_level"), "INFO")
        self.assertEqual(cfg.get_entry("jwt", "expiry_hours"), 72)
        self.assertIsNone(cfg.get_entry("api_ninjas", "key"))
        self.assertEqual(cfg.get_entry("api_ninjas", "endpoint"),
                         DEFAULT_JOKES_ENDPOINT)
        self.assertEqual(cfg.get_entry("database", "write_timeout"), 5.0)

    @patch.dict(os.environ, {"API_NINJAS_KEY": "k"}, clear=True)
    def test_jwt_secret_is_required(self):
        cfg = Configuration()
        cfg.configure(CONFIGURATION_LAYOUT)

        with self.assertRaises(ValueError):
            cfg.process_config()

    @patch.dict(os.environ, {"JWT_SECRET": "s3cret",
                             "API_NINJAS_KEY": "ninja"}, clear=True)
    def test_api_key_read_from_environment(self):
        cfg = Configuration()
        cfg.configure(CONFIGURATION_LAYOUT)
        cfg.process_config()

        self.assertEqual(cfg.get_entry("api_ninjas", "key"), "ninja")
        self.assertEqual(cfg.get_display_value("api_ninjas", "key"),
                         MASKED_VALUE)
