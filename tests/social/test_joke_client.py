import logging
import unittest
import httpx
from quipfeed_common.service_errors import DependencyFailure
from quipfeed_common.service_health_enums import ComponentDegradationLevel
from joke_client import API_KEY_HEADER, JokeClient
from state_object import StateObject

ENDPOINT = "https://jokes.example.test/v1/jokes"


class TestJokeClient(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = logging.getLogger("test_logger")
        self.logger.addHandler(logging.NullHandler())
        self.state = StateObject()
        self.requests = []

    def _client(self, handler, api_key="ninja-key"):
        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        client = JokeClient(ENDPOINT, api_key, self.logger, self.state,
                            transport=httpx.MockTransport(recording_handler))
        self.addAsyncCleanup(client.close)
        return client

    async def test_returns_first_joke(self):
        client = self._client(lambda request: httpx.Response(
            200, json=[{"joke": "first"}, {"joke": "second"}]))

        joke = await client.fetch_joke()

        self.assertEqual(joke, "first")
        self.assertEqual(self.requests[0].headers[API_KEY_HEADER], "ninja-key")
        self.assertEqual(str(self.requests[0].url), ENDPOINT)
        self.assertEqual(self.state.joke_service_health,
                         ComponentDegradationLevel.NONE)

    async def test_missing_key_fails_without_request(self):
        client = self._client(lambda request: httpx.Response(200, json=[]),
                               api_key=None)

        with self.assertRaises(DependencyFailure) as ctx:
            await client.fetch_joke()

        self.assertEqual(ctx.exception.message, "failed to fetch random joke")
        self.assertEqual(self.requests, [])

    async def test_non_200_status_fails(self):
        client = self._client(lambda request: httpx.Response(
            502, json={"error": "bad gateway"}))

        with self.assertRaises(DependencyFailure):
            await client.fetch_joke()

        self.assertEqual(self.state.joke_service_health,
                         ComponentDegradationLevel.PART_DEGRADED)

    async def test_empty_list_fails(self):
        client = self._client(lambda request: httpx.Response(200, json=[]))

        with self.assertRaises(DependencyFailure):
            await client.fetch_joke()

    async def test_unexpected_shape_fails(self):
        for payload in [{"joke": "not a list"}, [{"text": "x"}], ["plain"]]:
            with self.subTest(payload=payload):
                client = self._client(
                    lambda request, body=payload: httpx.Response(200,
                                                                 json=body))
                with self.assertRaises(DependencyFailure):
                    await client.fetch_joke()

    async def test_invalid_json_fails(self):
        client = self._client(lambda request: httpx.Response(
            200, content=b"<html>", headers={"content-type": "text/html"}))

        with self.assertRaises(DependencyFailure):
            await client.fetch_joke()

    async def test_transport_error_fails(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = self._client(handler)

        with self.assertRaises(DependencyFailure):
            await client.fetch_joke()

        self.assertEqual(self.state.joke_service_health_state_str,
                         "Joke service unreachable")

    async def test_recovery_marks_service_operational(self):
        responses = [httpx.Response(500), httpx.Response(200, json=[
            {"joke": "back again"}])]
        client = self._client(lambda request: responses.pop(0))

        with self.assertRaises(DependencyFailure):
            await client.fetch_joke()

        self.assertEqual(await client.fetch_joke(), "back again")
        self.assertEqual(self.state.joke_service_health,
                         ComponentDegradationLevel.NONE)
