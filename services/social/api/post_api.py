"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import typing
from quart import Blueprint
from api.post_api_view import PostApiView
from authorization_gate import AuthorizationGate
from joke_client import JokeClient
from state_object import StateObject


def create_blueprint(logger: logging.Logger,
                     state_object: StateObject,
                     gate: AuthorizationGate,
                     joke_client: JokeClient,
                     write_timeout: typing.Optional[float] = None) \
        -> Blueprint:
    """
    Creates the blueprint for the post routes, all behind the
    authorization gate.

    Returns:
        Blueprint: A Quart `Blueprint` object containing the routes.
    """
    # pylint: disable=too-many-arguments, too-many-positional-arguments
    view = PostApiView(logger, state_object, joke_client, write_timeout)

    blueprint = Blueprint('post_api', __name__)

    logger.debug("Registering Post API routes:")

    logger.debug("=> /posts [POST]")

    @blueprint.route("", methods=["POST"])
    @gate.require_authenticated
    async def create_post_request():
        return await view.create_post()

    logger.debug("=> /posts [GET]")

    @blueprint.route("", methods=["GET"])
    @gate.require_authenticated
    async def list_posts_request():
        return await view.list_posts()

    logger.debug("=> /posts/<id> [GET]")

    @blueprint.route("/<post_id>", methods=["GET"])
    @gate.require_authenticated
    async def get_post_request(post_id):
        return await view.get_post(post_id)

    logger.debug("=> /posts/<id> [DELETE]")

    @blueprint.route("/<post_id>", methods=["DELETE"])
    @gate.require_authenticated
    async def delete_post_request(post_id):
        return await view.delete_post(post_id)

    return blueprint
