"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import typing
from pydantic import BaseModel, Field, field_validator
import quart
from quipfeed_common.base_api_view import BaseApiView, MAX_INTEGER_VALUE
from quipfeed_common.service_errors import ServiceError
from data_access_layer.activity_data_access_layer import \
    ActivityDataAccessLayer
from data_access_layer.comment_data_access_layer import \
    CommentDataAccessLayer
from data_services.activity_recorder import ActivityRecorder
from data_services.comment_data_service import CommentDataService
from state_object import StateObject


class CreateCommentRequest(BaseModel):
    """
    Request body for commenting on a post. Any author id sent by the client
    is ignored; the author is always the authenticated caller.

    Attributes:
        content (str): Comment text, non-blank.
        post_id (int): Id of the post commented on.
    """
    content: str
    post_id: int = Field(gt=0, le=MAX_INTEGER_VALUE)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content cannot be blank")
        return value


class CommentApiView(BaseApiView):
    """
    API view for comments, behind the authorization gate.
    """

    def __init__(self, logger: logging.Logger,
                 state_object: StateObject,
                 write_timeout: typing.Optional[float] = None) -> None:
        self._logger = logger.getChild(__name__)
        self._state_object = state_object
        self._write_timeout = write_timeout

    async def create_comment(self):
        try:
            req = await self._parse_request_body(CreateCommentRequest)

            result = await self._create_service().create_comment(
                quart.g.user_id, req.content, req.post_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    async def get_comment(self, raw_comment_id: str):
        try:
            comment_id = self._parse_resource_id(raw_comment_id, "comment")
            result = await self._create_service().get_comment(comment_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    async def delete_comment(self, raw_comment_id: str):
        try:
            comment_id = self._parse_resource_id(raw_comment_id, "comment")
            result = await self._create_service().delete_comment(
                quart.g.user_id, comment_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    def _create_service(self) -> CommentDataService:
        db = quart.g.db
        comment_dal = CommentDataAccessLayer(db, self._logger,
                                             self._state_object,
                                             self._write_timeout)
        activity_dal = ActivityDataAccessLayer(db, self._logger,
                                               self._state_object,
                                               self._write_timeout)
        return CommentDataService(comment_dal,
                                  ActivityRecorder(activity_dal, self._logger),
                                  self._logger)
