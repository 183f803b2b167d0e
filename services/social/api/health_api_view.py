"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import http
import logging
import time
import quart
from quipfeed_common.base_api_view import BaseApiView
from quipfeed_common.service_health_enums import (ComponentDegradationLevel,
                                                  HealthComponent,
                                                  ServiceDegradationStatus)
from state_object import StateObject


class HealthApiView(BaseApiView):
    """
    Reports the health of the service and of the dependencies it has
    observed: the database and the external joke service.
    """

    def __init__(self, logger: logging.Logger,
                 state_object: StateObject) -> None:
        self._logger = logger.getChild(__name__)
        self._state_object = state_object

    def _component_levels(self) -> dict:
        return {
            HealthComponent.DATABASE: (
                self._state_object.database_health,
                self._state_object.database_health_state_str),
            HealthComponent.JOKE_SERVICE: (
                self._state_object.joke_service_health,
                self._state_object.joke_service_health_state_str),
            HealthComponent.SERVICE: (
                self._state_object.service_health,
                self._state_object.service_health_state_str),
        }

    async def health(self):
        """
        Returns:
            tuple: (JSON health document, 200). The document holds the
            overall status, every dependency's degradation level, the
            current issues (or null), the uptime and the version.
        """
        uptime: int = int(time.time()) - self._state_object.startup_time
        components = self._component_levels()

        issues: list = [
            {"component": component.value,
             "status": level.value,
             "details": details}
            for component, (level, details) in components.items()
            if level != ComponentDegradationLevel.NONE
        ]

        if any(level == ComponentDegradationLevel.FULLY_DEGRADED
               for level, _ in components.values()):
            status = ServiceDegradationStatus.CRITICAL
        elif issues:
            status = ServiceDegradationStatus.DEGRADED
        else:
            status = ServiceDegradationStatus.HEALTHY

        if status != ServiceDegradationStatus.HEALTHY:
            self._logger.debug("Health check reports %s", status.value)

        response: dict = {
            "status": status.value,
            "dependencies": {component.value: level.value
                             for component, (level, _) in components.items()},
            "issues": issues if issues else None,
            "uptime_seconds": uptime,
            "version": self._state_object.version
        }

        return quart.jsonify(response), http.HTTPStatus.OK
