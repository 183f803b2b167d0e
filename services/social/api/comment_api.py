"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import typing
from quart import Blueprint
from api.comment_api_view import CommentApiView
from authorization_gate import AuthorizationGate
from state_object import StateObject


def create_blueprint(logger: logging.Logger,
                     state_object: StateObject,
                     gate: AuthorizationGate,
                     write_timeout: typing.Optional[float] = None) \
        -> Blueprint:
    """
    Creates the blueprint for the comment routes, all behind the
    authorization gate.

    Returns:
        Blueprint: A Quart `Blueprint` object containing the routes.
    """
    view = CommentApiView(logger, state_object, write_timeout)

    blueprint = Blueprint('comment_api', __name__)

    logger.debug("Registering Comment API routes:")

    logger.debug("=> /comments [POST]")

    @blueprint.route("", methods=["POST"])
    @gate.require_authenticated
    async def create_comment_request():
        return await view.create_comment()

    logger.debug("=> /comments/<id> [GET]")

    @blueprint.route("/<comment_id>", methods=["GET"])
    @gate.require_authenticated
    async def get_comment_request(comment_id):
        return await view.get_comment(comment_id)

    logger.debug("=> /comments/<id> [DELETE]")

    @blueprint.route("/<comment_id>", methods=["DELETE"])
    @gate.require_authenticated
    async def delete_comment_request(comment_id):
        return await view.delete_comment(comment_id)

    return blueprint
