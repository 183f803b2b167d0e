"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import time
from dataclasses import dataclass, field
from quipfeed_common.service_health_enums import ComponentDegradationLevel


@dataclass
class StateObject:
    """
    Shared, process-wide view of the social service's health.

    Attributes:
        service_health (ComponentDegradationLevel): Health of the service
            itself.
        service_health_state_str (str): Description of the service health.
        database_health (ComponentDegradationLevel): Health of the database
            as last observed by a data access layer.
        database_health_state_str (str): Description of the database health.
        joke_service_health (ComponentDegradationLevel): Health of the
            external joke service as last observed by the joke client.
        joke_service_health_state_str (str): Description of the joke
            service health.
        version (str): The version of the service.
        startup_time (int): Unix time the service was started.
    """
    service_health: ComponentDegradationLevel = ComponentDegradationLevel.NONE
    service_health_state_str: str = ""
    database_health: ComponentDegradationLevel = ComponentDegradationLevel.NONE
    database_health_state_str: str = ""
    joke_service_health: ComponentDegradationLevel = \
        ComponentDegradationLevel.NONE
    joke_service_health_state_str: str = ""
    version: str = ""
    startup_time: int = field(default_factory=lambda: int(time.time()))
