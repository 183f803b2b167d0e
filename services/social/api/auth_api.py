"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import typing
from quart import Blueprint
from api.auth_api_view import AuthApiView
from state_object import StateObject
from token_service import TokenService


def create_blueprint(logger: logging.Logger,
                     state_object: StateObject,
                     token_service: TokenService,
                     write_timeout: typing.Optional[float] = None) \
        -> Blueprint:
    """
    Creates the blueprint for registration and login. These routes are
    public: they are not behind the authorization gate.

    Args:
        logger (logging.Logger): A logger instance for logging messages.
        state_object (StateObject): Service state, updated on database
            failures.
        token_service (TokenService): Issues the login token.
        write_timeout (float): Deadline for the registration insert.

    Returns:
        Blueprint: A Quart `Blueprint` object containing the routes.
    """
    view = AuthApiView(logger, state_object, token_service, write_timeout)

    blueprint = Blueprint('auth_api', __name__)

    logger.debug("Registering Auth API routes:")

    logger.debug("=> /users/register [POST]")

    @blueprint.route("/register", methods=["POST"])
    async def register_request():
        return await view.register()

    logger.debug("=> /users/login [POST]")

    @blueprint.route("/login", methods=["POST"])
    async def login_request():
        return await view.login()

    return blueprint
