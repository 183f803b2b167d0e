"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from quipfeed_common.configuration import configuration_setup
from quipfeed_common.logging_consts import LOGGING_VALID_LOG_LEVELS

DEFAULT_JOKES_ENDPOINT = "https://api.api-ninjas.com/v1/jokes"

CONFIGURATION_LAYOUT = configuration_setup.ConfigurationSetup(
    {
        "logging": [
            configuration_setup.ConfigurationSetupItem(
                "log_level", configuration_setup.ConfigItemDataType.STRING,
                valid_values=LOGGING_VALID_LOG_LEVELS, default_value="INFO")
        ],
        "jwt": [
            configuration_setup.ConfigurationSetupItem(
                "secret", configuration_setup.ConfigItemDataType.STRING,
                is_required=True, is_secret=True),
            configuration_setup.ConfigurationSetupItem(
                "expiry_hours",
                configuration_setup.ConfigItemDataType.UNSIGNED_INT,
                default_value=72)
        ],
        "api_ninjas": [
            configuration_setup.ConfigurationSetupItem(
                "key", configuration_setup.ConfigItemDataType.STRING,
                is_secret=True),
            configuration_setup.ConfigurationSetupItem(
                "endpoint", configuration_setup.ConfigItemDataType.STRING,
                default_value=DEFAULT_JOKES_ENDPOINT),
            configuration_setup.ConfigurationSetupItem(
                "timeout", configuration_setup.ConfigItemDataType.FLOAT,
                default_value=5.0)
        ],
        "database": [
            configuration_setup.ConfigurationSetupItem(
                "write_timeout", configuration_setup.ConfigItemDataType.FLOAT,
                default_value=5.0)
        ]
    }
)
