"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import typing
from quipfeed_common.service_errors import NotFound
from authorization_gate import AuthorizationGate
from data_access_layer.post_data_access_layer import PostDataAccessLayer
from data_services.activity_recorder import ActivityRecorder
from joke_client import JokeClient


class PostDataService:
    """ Create, read, list and delete logic for posts. """

    def __init__(self,
                 post_dal: PostDataAccessLayer,
                 activity_recorder: ActivityRecorder,
                 joke_client: JokeClient,
                 logger: logging.Logger):
        self._post_dal = post_dal
        self._activity_recorder = activity_recorder
        self._joke_client = joke_client
        self._logger = logger.getChild(__name__)

    async def create_post(self, caller_id: int,
                          content: typing.Optional[str],
                          image_url: str) -> dict:
        """
        Create a post owned by the caller.

        Blank content (empty or whitespace only) is replaced by a random
        joke. If no joke can be fetched nothing is stored.

        Raises:
            DependencyFailure: Content was blank and no joke was available.
            StorageFailure: The post could not be stored.
        """
        if content is None or not content.strip():
            content = await self._joke_client.fetch_joke()
            self._logger.debug("Post content filled with a joke")

        post = await self._post_dal.create_post(content, image_url, caller_id)

        await self._activity_recorder.record_best_effort(
            caller_id, f"User created a new POST with ID {post['id']}")

        return {
            "message": "post created successfully",
            "post": post,
            "status": HTTPStatus.CREATED
        }

    async def list_posts(self) -> list[dict]:
        return await self._post_dal.list_posts()

    async def get_post(self, post_id: int) -> dict:
        """
        Fetch a post with its comments, each comment carrying its author's
        id and name.

        Raises:
            NotFound: No post has that id.
        """
        post = await self._post_dal.get_post(post_id)
        if post is None:
            raise NotFound("post not found")

        comments = [
            {
                "id": comment["id"],
                "content": comment["content"],
                "author": {
                    "id": comment["author_id"],
                    "name": comment["author_name"],
                },
            }
            for comment in await self._post_dal.list_comments_for_post(post_id)
        ]

        return {"post": post, "comments": comments, "status": HTTPStatus.OK}

    async def delete_post(self, caller_id: int, post_id: int) -> dict:
        """
        Delete a post, and with it its comments.

        Raises:
            NotFound: No post has that id.
            Forbidden: The caller does not own the post.
        """
        owner_id = await self._post_dal.get_post_owner(post_id)
        if owner_id is None:
            raise NotFound("post not found")

        AuthorizationGate.require_ownership(owner_id, caller_id, "post")

        await self._post_dal.delete_post(post_id)

        await self._activity_recorder.record_best_effort(
            caller_id, f"User deleted POST with ID {post_id}")

        return {"message": "post deleted successfully",
                "status": HTTPStatus.OK}
