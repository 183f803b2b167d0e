"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import os
import sys
import typing
from werkzeug.exceptions import HTTPException
import quart
from quipfeed_common import __version__
from quipfeed_common.configuration.configuration import (Configuration,
                                                         parse_bool_string)
from quipfeed_common.base_microservice_application \
    import BaseMicroserviceApplication
from quipfeed_common.logging_consts import LOGGING_DATETIME_FORMAT_STRING, \
                                           LOGGING_DEFAULT_LOG_LEVEL, \
                                           LOGGING_LOG_FORMAT_STRING
from api import create_routes
from configuration_layout import CONFIGURATION_LAYOUT
from joke_client import JokeClient
from state_object import StateObject
from token_service import TokenService


class Application(BaseMicroserviceApplication):
    """ QuipFeed Social Service """

    def __init__(self, quart_instance):
        super().__init__()
        self._quart_instance = quart_instance
        self._config: typing.Optional[Configuration] = None
        self._state_object: StateObject = StateObject()
        self._token_service: typing.Optional[TokenService] = None
        self._joke_client: typing.Optional[JokeClient] = None

        self._logger = logging.getLogger(__name__)
        log_format = logging.Formatter(LOGGING_LOG_FORMAT_STRING,
                                       LOGGING_DATETIME_FORMAT_STRING)
        console_stream = logging.StreamHandler(sys.stdout)
        console_stream.setFormatter(log_format)
        self._logger.setLevel(LOGGING_DEFAULT_LOG_LEVEL)
        self._logger.propagate = False
        self._logger.addHandler(console_stream)

    @property
    def state_object(self) -> StateObject:
        """ Service health state shared with the views. """
        return self._state_object

    @property
    def config(self) -> typing.Optional[Configuration]:
        """ Processed configuration, None until initialised. """
        return self._config

    async def _initialise(self) -> bool:
        self._logger.info("QuipFeed Social Microservice %s", __version__)

        config_file = os.getenv("QUIPFEED_SOCIAL_CONFIG_FILE", None)
        raw_required = os.getenv("QUIPFEED_SOCIAL_CONFIG_FILE_REQUIRED",
                                 "false")

        config_file_required = parse_bool_string(raw_required)
        if config_file_required is None:
            print(f"[FATAL ERROR] Invalid value for "
                  f"QUIPFEED_SOCIAL_CONFIG_FILE_REQUIRED: '{raw_required}'",
                  flush=True)
            return False

        if not config_file and config_file_required:
            print("[FATAL ERROR] Configuration file missing!", flush=True)
            return False

        self._config = Configuration()
        self._config.configure(CONFIGURATION_LAYOUT,
                               config_file,
                               config_file_required)

        try:
            self._config.process_config()

        except ValueError as ex:
            self._logger.critical("Configuration error : %s", ex)
            return False

        self._logger.setLevel(self._config.get_entry("logging", "log_level"))

        self._display_configuration_details()

        self._state_object.version = __version__

        self._token_service = TokenService(
            self._config.get_entry("jwt", "secret"),
            self._logger,
            self._config.get_entry("jwt", "expiry_hours"))

        self._joke_client = JokeClient(
            self._config.get_entry("api_ninjas", "endpoint"),
            self._config.get_entry("api_ninjas", "key"),
            self._logger,
            self._state_object,
            timeout=self._config.get_entry("api_ninjas", "timeout"))

        if not self._config.get_entry("api_ninjas", "key"):
            self._logger.warning("api_ninjas::key is not set, posts without "
                                 "content will be rejected")

        self._quart_instance.register_blueprint(
            create_routes(self._logger,
                          self._state_object,
                          self._token_service,
                          self._joke_client,
                          self._config.get_entry("database", "write_timeout")))

        self._quart_instance.register_error_handler(
            HTTPException, self._handle_http_exception)
        self._quart_instance.register_error_handler(
            Exception, self._handle_unexpected_exception)

        return True

    async def _shutdown(self):
        if self._joke_client is not None:
            await self._joke_client.close()
            self._joke_client = None

    async def _handle_http_exception(self, ex: HTTPException):
        """
        Render routing and protocol errors (unknown route, wrong method)
        in the service's JSON error envelope.
        """
        return quart.jsonify({"message": ex.name}), ex.code

    async def _handle_unexpected_exception(self, ex: Exception):
        """
        Last-resort handler: log the failure and return a generic 500, so
        no internal error text reaches the client.
        """
        self._logger.error("Unhandled exception while handling request",
                           exc_info=ex)
        return quart.jsonify({"message": "Internal server error"}), \
            HTTPStatus.INTERNAL_SERVER_ERROR

    def _display_configuration_details(self):
        self._logger.info("Configuration")
        self._logger.info("=============")

        for section in CONFIGURATION_LAYOUT.get_sections():
            self._logger.info("[%s]", section)

            for item in CONFIGURATION_LAYOUT.get_section(section):
                self._logger.info(
                    "=> %-30s: %s", item.item_name,
                    self._config.get_display_value(section, item.item_name))
