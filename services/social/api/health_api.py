"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
from quart import Blueprint
from quipfeed_common.route_decorators import route_not_using_db
from api.health_api_view import HealthApiView
from state_object import StateObject


def create_blueprint(logger: logging.Logger,
                     state_object: StateObject) -> Blueprint:
    """
    Creates and returns a Quart Blueprint for the Health Status API.

    The route is public and does not check a database connection out of
    the pool, so it keeps answering while the database is unreachable.

    Args:
        logger (logging.Logger): The logger instance used for logging API
                                 registration.
        state_object (StateObject): The application state object passed to the
                                    view.

    Returns:
        Blueprint: A Quart Blueprint instance with the registered health status
                   route.
    """
    view = HealthApiView(logger, state_object)

    blueprint = Blueprint('health_api', __name__)

    logger.debug("Registering Health Status API:")
    logger.debug("=> /health [GET]")

    @blueprint.route('/health', methods=['GET'])
    @route_not_using_db
    async def health_request():
        return await view.health()

    return blueprint
