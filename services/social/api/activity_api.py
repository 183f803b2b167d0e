"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
from quart import Blueprint
from api.activity_api_view import ActivityApiView
from authorization_gate import AuthorizationGate
from state_object import StateObject


def create_blueprint(logger: logging.Logger,
                     state_object: StateObject,
                     gate: AuthorizationGate) -> Blueprint:
    """
    Creates the blueprint for the activity log route.

    Returns:
        Blueprint: A Quart `Blueprint` object containing the route.
    """
    view = ActivityApiView(logger, state_object)

    blueprint = Blueprint('activity_api', __name__)

    logger.debug("Registering Activity API routes:")
    logger.debug("=> /activities [GET]")

    @blueprint.route("", methods=["GET"])
    @gate.require_authenticated
    async def list_activities_request():
        return await view.list_activities()

    return blueprint
