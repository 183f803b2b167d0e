"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import asyncio
import typing
import asyncpg
from quipfeed_common.base_data_access_layer import BaseDataAccessLayer
from quipfeed_common.service_errors import DuplicateIdentity


class UserDataAccessLayer(BaseDataAccessLayer):
    """ Storage of user identities and password hashes. """

    async def create_user(self,
                          full_name: str,
                          email: str,
                          username: str,
                          password_hash: str,
                          age: int) -> int:
        """
        Insert a new user.

        Uniqueness of email and username is enforced by the table's unique
        constraints, so a concurrent registration cannot slip between a
        check and the insert.

        Returns:
            int: The id assigned to the new user.

        Raises:
            DuplicateIdentity: If the email or username is already taken.
            StorageFailure: On any other database error or if the write
                does not complete within the write deadline.
        """
        # pylint: disable=too-many-arguments, too-many-positional-arguments
        try:
            user_id = await self._db.fetchval(
                """
                INSERT INTO users (full_name, email, username, password, age)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING id
                """,
                full_name, email, username, password_hash, age,
                timeout=self._write_timeout
            )

        except asyncpg.UniqueViolationError as ex:
            self._logger.warning("Attempt to register duplicate user "
                                 "(constraint %s)",
                                 getattr(ex, "constraint_name", None))
            raise DuplicateIdentity() from ex

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("creating user") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("creating user") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("creating user") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("creating user (timed out)") from ex

        self._mark_database_operational()
        self._logger.info("Created user %s (%d)", username, user_id)
        return user_id

    async def get_by_email(self, email: str) -> typing.Optional[dict]:
        """
        Fetch the credentials of the user registered with ``email``.

        Returns:
            dict | None: ``id``, ``email`` and ``password`` (hash) of the
            user, or None if no user has that email.
        """
        try:
            user = await self._db.fetchrow(
                "SELECT id, email, password FROM users WHERE email = $1",
                email
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("looking up user") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("looking up user") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("looking up user") from ex

        self._mark_database_operational()

        if user is None:
            self._logger.debug("No user registered for email %s", email)
            return None

        return dict(user)
