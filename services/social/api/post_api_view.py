"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import typing
from pydantic import (BaseModel, field_validator, HttpUrl, TypeAdapter,
                      ValidationError)
import quart
from quipfeed_common.base_api_view import BaseApiView
from quipfeed_common.service_errors import ServiceError
from data_access_layer.activity_data_access_layer import \
    ActivityDataAccessLayer
from data_access_layer.post_data_access_layer import PostDataAccessLayer
from data_services.activity_recorder import ActivityRecorder
from data_services.post_data_service import PostDataService
from joke_client import JokeClient
from state_object import StateObject

_HTTP_URL = TypeAdapter(HttpUrl)


class CreatePostRequest(BaseModel):
    """
    Request body for creating a post.

    Attributes:
        content (Optional[str]): Body text. When missing or blank the post
            is filled with a random joke.
        image_url (str): http(s) URL of the post's image, stored as sent.
    """
    content: typing.Optional[str] = None
    image_url: str

    @field_validator("image_url")
    @classmethod
    def image_url_is_http(cls, value: str) -> str:
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as ex:
            raise ValueError("image_url must be an http(s) URL") from ex
        return value


class PostApiView(BaseApiView):
    """
    API view for posts. Every handler runs behind the authorization gate,
    so ``quart.g.user_id`` holds the verified caller.
    """

    def __init__(self, logger: logging.Logger,
                 state_object: StateObject,
                 joke_client: JokeClient,
                 write_timeout: typing.Optional[float] = None) -> None:
        self._logger = logger.getChild(__name__)
        self._state_object = state_object
        self._joke_client = joke_client
        self._write_timeout = write_timeout

    async def create_post(self):
        try:
            req = await self._parse_request_body(CreatePostRequest)

            result = await self._create_service().create_post(
                quart.g.user_id, req.content, req.image_url)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    async def list_posts(self):
        try:
            posts = await self._create_service().list_posts()

        except ServiceError as ex:
            return self._error_response(ex)

        return quart.jsonify(posts), HTTPStatus.OK

    async def get_post(self, raw_post_id: str):
        try:
            post_id = self._parse_resource_id(raw_post_id, "post")
            result = await self._create_service().get_post(post_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    async def delete_post(self, raw_post_id: str):
        try:
            post_id = self._parse_resource_id(raw_post_id, "post")
            result = await self._create_service().delete_post(
                quart.g.user_id, post_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    def _create_service(self) -> PostDataService:
        db = quart.g.db
        post_dal = PostDataAccessLayer(db, self._logger, self._state_object,
                                       self._write_timeout)
        activity_dal = ActivityDataAccessLayer(db, self._logger,
                                               self._state_object,
                                               self._write_timeout)
        return PostDataService(post_dal,
                               ActivityRecorder(activity_dal, self._logger),
                               self._joke_client,
                               self._logger)
