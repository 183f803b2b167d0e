"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import typing
import httpx
from quipfeed_common.service_errors import DependencyFailure
from quipfeed_common.service_health_enums import ComponentDegradationLevel
from state_object import StateObject

API_KEY_HEADER = "X-Api-Key"


class JokeClient:
    """
    Client for the API Ninjas jokes endpoint, used to fill posts that were
    created without any content.

    The endpoint returns a JSON list of ``{"joke": ...}`` objects; only the
    text of the first one is used.
    """

    def __init__(self,
                 endpoint: str,
                 api_key: typing.Optional[str],
                 logger: logging.Logger,
                 state_object: StateObject,
                 timeout: float = 5.0,
                 transport: typing.Optional[httpx.AsyncBaseTransport] = None):
        # pylint: disable=too-many-arguments, too-many-positional-arguments
        self._endpoint = endpoint
        self._api_key = api_key
        self._logger = logger.getChild(__name__)
        self._state_object = state_object
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch_joke(self) -> str:
        """
        Fetch one random joke.

        Returns:
            str: The joke text.

        Raises:
            DependencyFailure: If no API key is configured, the request
                fails, or the response holds no usable joke.
        """
        if not self._api_key:
            self._logger.error("Joke requested but api_ninjas::key is not "
                               "configured")
            self._mark_unavailable("API key not configured")
            raise DependencyFailure("failed to fetch random joke")

        try:
            response = await self._client.get(
                self._endpoint, headers={API_KEY_HEADER: self._api_key})

        except httpx.HTTPError as ex:
            self._logger.error("Joke service request failed: %s", ex)
            self._mark_unavailable("Joke service unreachable")
            raise DependencyFailure("failed to fetch random joke") from ex

        if response.status_code != HTTPStatus.OK:
            self._logger.error("Joke service returned status %d",
                               response.status_code)
            self._mark_unavailable(
                f"Joke service returned status {response.status_code}")
            raise DependencyFailure("failed to fetch random joke")

        try:
            jokes = response.json()
        except ValueError as ex:
            self._logger.error("Joke service returned invalid JSON: %s", ex)
            self._mark_unavailable("Joke service returned invalid JSON")
            raise DependencyFailure("failed to fetch random joke") from ex

        if not isinstance(jokes, list) or not jokes or \
                not isinstance(jokes[0], dict) or \
                not isinstance(jokes[0].get("joke"), str):
            self._logger.error("Joke service returned no jokes")
            self._mark_unavailable("Joke service returned no jokes")
            raise DependencyFailure("failed to fetch random joke")

        self._state_object.joke_service_health = ComponentDegradationLevel.NONE
        self._state_object.joke_service_health_state_str = \
            "Joke service operational"

        return jokes[0]["joke"]

    async def close(self) -> None:
        """ Close the underlying HTTP client. """
        await self._client.aclose()

    def _mark_unavailable(self, details: str) -> None:
        self._state_object.joke_service_health = \
            ComponentDegradationLevel.PART_DEGRADED
        self._state_object.joke_service_health_state_str = details
