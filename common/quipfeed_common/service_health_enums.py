"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from enum import Enum


class ServiceDegradationStatus(Enum):
    """ Overall status reported by the health endpoint """

    HEALTHY = "healthy"

    # At least one dependency is misbehaving but requests still succeed
    DEGRADED = "degraded"

    # At least one dependency is fully unavailable
    CRITICAL = "critical"


class ComponentDegradationLevel(Enum):
    """ Degradation level of a single dependency """

    NONE = "none"
    PART_DEGRADED = "partial"
    FULLY_DEGRADED = "fully_degraded"


class HealthComponent(Enum):
    """ Dependencies tracked on the service state object """

    DATABASE = "database"
    JOKE_SERVICE = "joke_service"
    SERVICE = "service"
