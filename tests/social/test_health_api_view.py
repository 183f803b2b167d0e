from http import HTTPStatus
import logging
import time
import unittest
from quart import Quart
from quipfeed_common.service_health_enums import ComponentDegradationLevel
from api.health_api_view import HealthApiView
from state_object import StateObject


class TestHealthApiView(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.app = Quart(__name__)
        self.logger = logging.getLogger("test_logger")
        self.logger.addHandler(logging.NullHandler())
        self.state = StateObject(version="V1.0.0",
                                 startup_time=int(time.time()) - 10)
        self.view = HealthApiView(self.logger, self.state)

    async def _health(self):
        async with self.app.test_request_context("/health"):
            resp, status = await self.view.health()
            return await resp.get_json(), status

    async def test_healthy(self):
        body, status = await self._health()

        self.assertEqual(status, HTTPStatus.OK)
        self.assertEqual(body["status"], "healthy")
        self.assertIsNone(body["issues"])
        self.assertEqual(body["version"], "V1.0.0")
        self.assertGreaterEqual(body["uptime_seconds"], 10)
        self.assertEqual(body["dependencies"], {"database": "none",
                                                "joke_service": "none",
                                                "service": "none"})

    async def test_degraded_joke_service(self):
        self.state.joke_service_health = ComponentDegradationLevel.PART_DEGRADED
        self.state.joke_service_health_state_str = "Joke service unreachable"

        body, _ = await self._health()

        self.assertEqual(body["status"], "degraded")
        self.assertEqual(body["issues"], [{
            "component": "joke_service",
            "status": "partial",
            "details": "Joke service unreachable"}])

    async def test_unreachable_database_is_critical(self):
        self.state.database_health = ComponentDegradationLevel.FULLY_DEGRADED
        self.state.database_health_state_str = "Database unreachable"

        body, status = await self._health()

        self.assertEqual(status, HTTPStatus.OK)
        self.assertEqual(body["status"], "critical")
        self.assertEqual(body["dependencies"]["database"], "fully_degraded")
