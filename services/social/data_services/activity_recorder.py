"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
from quipfeed_common.service_errors import StorageFailure
from data_access_layer.activity_data_access_layer import \
    ActivityDataAccessLayer


class ActivityRecorder:
    """
    Append-only audit trail of user actions.

    Activity entries are not source-of-truth data: every resource service
    records them with ``record_best_effort`` after its own write has
    succeeded, so a failed audit write never fails or rolls back the action
    it describes. The write and its audit entry are therefore not atomic;
    a crash in between loses the entry.
    """

    def __init__(self, activity_dal: ActivityDataAccessLayer,
                 logger: logging.Logger):
        self._activity_dal = activity_dal
        self._logger = logger.getChild(__name__)

    async def record(self, user_id: int, description: str) -> int:
        """
        Store one activity entry.

        Returns:
            int: Id of the new entry.

        Raises:
            StorageFailure: If the entry could not be stored.
        """
        return await self._activity_dal.insert_activity(user_id, description)

    async def record_best_effort(self, user_id: int,
                                 description: str) -> bool:
        """
        Store one activity entry, logging instead of raising on failure.

        Returns:
            bool: True if the entry was stored.
        """
        try:
            await self.record(user_id, description)

        except StorageFailure:
            self._logger.warning("Failed to log activity '%s' for user %d",
                                 description, user_id)
            return False

        return True

    async def list_for_user(self, user_id: int) -> list[dict]:
        """
        Returns:
            list[dict]: The user's activity entries, ``created_at`` as an
            ISO-8601 string.
        """
        activities = await self._activity_dal.list_for_user(user_id)

        for activity in activities:
            created_at = activity.get("created_at")
            if created_at is not None:
                activity["created_at"] = created_at.isoformat()

        return activities
