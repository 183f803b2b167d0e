"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import typing
import quart
from authorization_gate import AuthorizationGate
from joke_client import JokeClient
from state_object import StateObject
from token_service import TokenService
from .activity_api import create_blueprint as create_activity_bp
from .auth_api import create_blueprint as create_auth_bp
from .comment_api import create_blueprint as create_comment_bp
from .health_api import create_blueprint as create_health_bp
from .post_api import create_blueprint as create_post_bp


def create_routes(logger: logging.Logger,
                  state_object: StateObject,
                  token_service: TokenService,
                  joke_client: JokeClient,
                  write_timeout: typing.Optional[float] = None) \
        -> quart.Blueprint:
    """
    Create and configure the API route blueprint for the application.

    Registration, login and health are public; every other route sits
    behind one shared authorization gate.

    Args:
        logger (logging.Logger): Logger instance for logging within the APIS.
        state_object (StateObject): Service health state.
        token_service (TokenService): Issues and verifies tokens.
        joke_client (JokeClient): Source of filler content for posts.
        write_timeout (float): Deadline applied to database writes.

    Returns:
        quart.Blueprint: The configured API blueprint with registered
                         sub-routes.
    """
    gate = AuthorizationGate(token_service, logger)

    api_bp = quart.Blueprint("api_routes", __name__)

    api_bp.register_blueprint(create_health_bp(logger, state_object))

    api_bp.register_blueprint(
        create_auth_bp(logger, state_object, token_service, write_timeout),
        url_prefix="/users")

    api_bp.register_blueprint(
        create_post_bp(logger, state_object, gate, joke_client,
                       write_timeout),
        url_prefix="/posts")

    api_bp.register_blueprint(
        create_comment_bp(logger, state_object, gate, write_timeout),
        url_prefix="/comments")

    api_bp.register_blueprint(
        create_activity_bp(logger, state_object, gate),
        url_prefix="/activities")

    return api_bp
