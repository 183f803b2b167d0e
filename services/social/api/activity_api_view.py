"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import quart
from quipfeed_common.base_api_view import BaseApiView
from quipfeed_common.service_errors import ServiceError
from data_access_layer.activity_data_access_layer import \
    ActivityDataAccessLayer
from data_services.activity_recorder import ActivityRecorder
from state_object import StateObject


class ActivityApiView(BaseApiView):
    """
    API view for the caller's own activity log.
    """

    def __init__(self, logger: logging.Logger,
                 state_object: StateObject) -> None:
        self._logger = logger.getChild(__name__)
        self._state_object = state_object

    async def list_activities(self):
        """
        List the activity entries of the authenticated caller. There is no
        way to ask for another user's entries.

        Returns:
            tuple: (JSON list of activities, HTTP status code)
        """
        activity_dal = ActivityDataAccessLayer(quart.g.db, self._logger,
                                               self._state_object)
        recorder = ActivityRecorder(activity_dal, self._logger)

        try:
            activities = await recorder.list_for_user(quart.g.user_id)

        except ServiceError as ex:
            return self._error_response(ex)

        return quart.jsonify(activities), HTTPStatus.OK
