"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import enum
import typing
from dataclasses import dataclass


class ConfigItemDataType(enum.Enum):
    """ Enumeration for configuration item data type """
    BOOLEAN = "bool"
    FLOAT = "float"
    INT = "int"
    STRING = "string"
    UNSIGNED_INT = "uint"


@dataclass(frozen=True)
class ConfigurationSetupItem:
    """
    Description of a single configuration item.

    Attributes:
        item_name: Name of the item within its section.
        item_type: Data type the raw value is converted to.
        valid_values: If set, the only values the item may take.
        is_required: Processing fails if no source provides a value.
        default_value: Value used when no source provides one.
        is_secret: The value is masked whenever it is displayed.
    """

    item_name: str
    item_type: ConfigItemDataType
    valid_values: typing.Optional[list] = None
    is_required: bool = False
    default_value: typing.Optional[object] = None
    is_secret: bool = False


class ConfigurationSetup:
    """
    Configuration layout: section name -> list of ``ConfigurationSetupItem``.
    """

    def __init__(self, setup_items: dict) -> None:
        if not isinstance(setup_items, dict):
            raise TypeError("setup_items must be a dict[str, "
                            "list[ConfigurationSetupItem]]")

        self._items = setup_items

    def get_sections(self) -> list:
        """
        Returns:
            List of the section names in the layout.
        """
        return list(self._items.keys())

    def get_section(self, name: str) -> list[ConfigurationSetupItem]:
        """
        Returns:
            The items of section ``name``, or an empty list if the section
            is not part of the layout.
        """
        return self._items.get(name, [])

    def get_item(self, section: str,
                 name: str) -> typing.Optional[ConfigurationSetupItem]:
        """
        Returns:
            The item called ``name`` in ``section``, or None.
        """
        for item in self.get_section(section):
            if item.item_name == name:
                return item
        return None
