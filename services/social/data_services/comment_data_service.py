"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
from quipfeed_common.service_errors import NotFound
from authorization_gate import AuthorizationGate
from data_access_layer.comment_data_access_layer import \
    CommentDataAccessLayer
from data_services.activity_recorder import ActivityRecorder


class CommentDataService:
    """ Create, read and delete logic for comments. """

    def __init__(self,
                 comment_dal: CommentDataAccessLayer,
                 activity_recorder: ActivityRecorder,
                 logger: logging.Logger):
        self._comment_dal = comment_dal
        self._activity_recorder = activity_recorder
        self._logger = logger.getChild(__name__)

    async def create_comment(self, caller_id: int, content: str,
                             post_id: int) -> dict:
        """
        Create a comment authored by the caller.

        Raises:
            NotFound: The post does not exist.
            StorageFailure: The comment could not be stored.
        """
        comment = await self._comment_dal.create_comment(content, post_id,
                                                         caller_id)

        await self._activity_recorder.record_best_effort(
            caller_id, f"User commented on POST with ID {post_id}")

        return {
            "message": "comment created successfully",
            "comment": comment,
            "status": HTTPStatus.CREATED
        }

    async def get_comment(self, comment_id: int) -> dict:
        """
        Fetch a comment with the content of its post and its author's name.

        Raises:
            NotFound: No comment has that id.
        """
        details = await self._comment_dal.get_comment_details(comment_id)
        if details is None:
            raise NotFound("comment not found")

        return {
            "comment": {
                "id": details["id"],
                "content": details["content"],
                "post_id": details["post_id"],
                "author_id": details["author_id"],
            },
            "post": {
                "id": details["post_id"],
                "content": details["post_content"],
            },
            "author": {
                "id": details["author_id"],
                "name": details["author_name"],
            },
            "status": HTTPStatus.OK
        }

    async def delete_comment(self, caller_id: int, comment_id: int) -> dict:
        """
        Raises:
            NotFound: No comment has that id.
            Forbidden: The caller is not the comment's author.
        """
        author_id = await self._comment_dal.get_comment_author(comment_id)
        if author_id is None:
            raise NotFound("comment not found")

        AuthorizationGate.require_ownership(author_id, caller_id, "comment")

        await self._comment_dal.delete_comment(comment_id)

        await self._activity_recorder.record_best_effort(
            caller_id, f"User deleted COMMENT with ID {comment_id}")

        return {"message": "comment deleted successfully",
                "status": HTTPStatus.OK}
