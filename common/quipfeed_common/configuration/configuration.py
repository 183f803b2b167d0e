"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import configparser
import os
import typing
from quipfeed_common.configuration.configuration_setup import (
    ConfigItemDataType, ConfigurationSetup, ConfigurationSetupItem)

MASKED_VALUE = "********"

TRUE_STRINGS: set = {"true", "1", "yes", "on"}
FALSE_STRINGS: set = {"false", "0", "no", "off"}


def parse_bool_string(value: str) -> typing.Optional[bool]:
    """
    Convert a textual boolean such as ``"yes"`` or ``"0"``.

    Returns:
        True or False, or None if the text is not a recognised boolean.
    """
    lowered = value.strip().lower()
    if lowered in TRUE_STRINGS:
        return True
    if lowered in FALSE_STRINGS:
        return False
    return None


class Configuration:
    """
    Layout-driven configuration reader.

    Each item declared in the layout is looked up, in order, in the
    environment (``SECTION_ITEM`` upper-cased), then in the optional INI
    file, then falls back to the item's default. The raw value is then
    checked and converted according to the item's type.
    """

    def __init__(self):
        self._parser = configparser.ConfigParser()
        self._config_file: typing.Optional[str] = None
        self._has_config_file: bool = False
        self._config_file_required: bool = False
        self._layout: typing.Optional[ConfigurationSetup] = None
        self._config_items: dict[str, dict[str, typing.Any]] = {}

        self._converters: dict[ConfigItemDataType,
                               typing.Callable[[typing.Any], typing.Any]] = {
            ConfigItemDataType.INT: self._to_int,
            ConfigItemDataType.STRING: str,
            ConfigItemDataType.BOOLEAN: self._to_bool,
            ConfigItemDataType.FLOAT: float,
            ConfigItemDataType.UNSIGNED_INT: self._to_uint,
        }

    def configure(self,
                  layout: ConfigurationSetup,
                  config_file: typing.Optional[str] = None,
                  file_required: bool = False) -> None:
        """
        Configure the reader with a layout and an optional file.

        Args:
            layout: Schema definition of configuration (required).
            config_file: Path to config file (optional).
            file_required: Whether file must exist and be readable.
        """
        if layout is None:
            raise ValueError("Configuration layout cannot be None.")

        self._config_file = config_file
        self._config_file_required = file_required
        self._layout = layout

    def process_config(self) -> None:
        """
        Read every item of the layout.

        Raises:
            RuntimeError: If ``configure`` has not been called.
            ValueError: If the file cannot be parsed or read when required,
                or an item is missing or invalid.
        """
        if self._layout is None:
            raise RuntimeError("Configuration layout must be set before "
                               "processing.")

        if self._config_file:
            try:
                files_read = self._parser.read(self._config_file)
            except configparser.Error as ex:
                raise ValueError(
                    f"[ConfigError] Failed to parse file '{self._config_file}'"
                    f": {ex}") from ex

            if not files_read and self._config_file_required:
                raise ValueError(
                    f"[ConfigError] Required config file '{self._config_file}'"
                    " could not be opened.")

            self._has_config_file = bool(files_read)

        for section_name in self._layout.get_sections():
            section = self._config_items.setdefault(section_name, {})

            for item in self._layout.get_section(section_name):
                section[item.item_name] = self._read_item(section_name, item)

    def get_entry(self, section: str, item: str) -> typing.Any:
        """
        Get a parsed configuration value.

        Raises:
            ValueError: If section or item not found.
        """
        try:
            return self._config_items[section][item]
        except KeyError as ex:
            raise ValueError(
                f"[ConfigError] Invalid key '{section}::{item}'") from ex

    def get_display_value(self, section: str, item: str) -> typing.Any:
        """
        Get a configuration value for display purposes; secret items that
        have a value are masked.
        """
        value = self.get_entry(section, item)
        layout_item = self._layout.get_item(section, item)

        if layout_item is not None and layout_item.is_secret and \
                value is not None:
            return MASKED_VALUE

        return value

    def _read_item(self,
                   section: str,
                   item: ConfigurationSetupItem) -> typing.Any:
        value = os.getenv(f"{section}_{item.item_name}".upper())

        if value is None and self._has_config_file:
            value = self._parser.get(section, item.item_name, fallback=None)

        if value is None:
            value = item.default_value

        if value is None:
            if item.is_required:
                raise ValueError(f"[ConfigError] Missing required '{section}::"
                                 f"{item.item_name}'")
            return None

        converter = self._converters.get(item.item_type)
        if converter is None:
            raise ValueError(f"[ConfigError] Unsupported type "
                             f"'{item.item_type}' for '{section}::"
                             f"{item.item_name}'")

        try:
            value = converter(value)
        except (TypeError, ValueError) as ex:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"{item.item_type.value} '{value}'") from ex

        if item.valid_values and value not in item.valid_values:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"value '{value}', expected one of {item.valid_values}")

        return value

    @staticmethod
    def _to_int(value: typing.Any) -> int:
        if isinstance(value, bool):
            raise ValueError("boolean is not an int")
        return int(value)

    @staticmethod
    def _to_uint(value: typing.Any) -> int:
        value = Configuration._to_int(value)
        if value < 0:
            raise ValueError("value must not be negative")
        return value

    @staticmethod
    def _to_bool(value: typing.Any) -> bool:
        if isinstance(value, bool):
            return value

        if isinstance(value, str):
            parsed = parse_bool_string(value)
            if parsed is not None:
                return parsed

        raise ValueError("not a boolean")
