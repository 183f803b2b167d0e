"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import abc
import logging
import typing
from quipfeed_common.service_errors import InvalidInput, StorageFailure
from quipfeed_common.service_health_enums import ComponentDegradationLevel


class BaseDataAccessLayer(abc.ABC):
    """
    Common plumbing for the data access layers.

    A data access layer wraps one checked-out database connection for the
    lifetime of a request. Failures and recoveries observed while talking to
    the database are reflected on the service state object, so the health
    endpoint can report them.
    """

    def __init__(self, db, logger: logging.Logger, state_object,
                 write_timeout: typing.Optional[float] = None):
        self._db = db
        self._logger: logging.Logger = logger.getChild(__name__)
        self._state_object = state_object
        self._write_timeout = write_timeout

    def _mark_database_operational(self) -> None:
        if self._state_object.database_health != \
                ComponentDegradationLevel.NONE:
            self._logger.info("Database operational again")
            self._state_object.database_health = ComponentDegradationLevel.NONE
            self._state_object.database_health_state_str = \
                "Database operational"

    def _mark_database_degraded(self,
                                level: ComponentDegradationLevel,
                                details: str) -> None:
        self._state_object.database_health = level
        self._state_object.database_health_state_str = details

    def _connection_failure(self, operation: str) -> StorageFailure:
        """
        Log a lost or unusable database connection and mark the database as
        fully degraded. Must be called from an ``except`` block.

        Returns:
            StorageFailure: The error to raise to the caller.
        """
        self._logger.exception("Database connection error while %s.",
                               operation)
        self._mark_database_degraded(ComponentDegradationLevel.FULLY_DEGRADED,
                                     "Database unreachable")
        return StorageFailure()

    def _invalid_argument(self, operation: str) -> InvalidInput:
        """
        Log a query argument that cannot be stored, for example an integer
        outside the column range. The database itself is fine, so its health
        is left untouched.

        Returns:
            InvalidInput: The error to raise to the caller.
        """
        self._logger.debug("Rejected query argument while %s.", operation,
                           exc_info=True)
        return InvalidInput()

    def _query_failure(self, operation: str) -> StorageFailure:
        """
        Log a failed statement and mark the database as partially degraded.
        Must be called from an ``except`` block.

        Returns:
            StorageFailure: The error to raise to the caller.
        """
        self._logger.exception("Database error while %s.", operation)
        self._mark_database_degraded(ComponentDegradationLevel.PART_DEGRADED,
                                     "Database operation failed")
        return StorageFailure()
