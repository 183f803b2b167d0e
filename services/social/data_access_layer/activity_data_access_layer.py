"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import asyncio
import asyncpg
from quipfeed_common.base_data_access_layer import BaseDataAccessLayer


class ActivityDataAccessLayer(BaseDataAccessLayer):
    """ Storage of the append-only user activity log. """

    async def insert_activity(self, user_id: int, description: str) -> int:
        try:
            activity_id = await self._db.fetchval(
                """
                INSERT INTO user_activity_logs (user_id, description)
                VALUES ($1, $2)
                RETURNING id
                """,
                user_id, description,
                timeout=self._write_timeout
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("logging activity") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("logging activity") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("logging activity") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("logging activity (timed out)") from ex

        self._mark_database_operational()
        return activity_id

    async def list_for_user(self, user_id: int) -> list[dict]:
        try:
            rows = await self._db.fetch(
                """
                SELECT id, user_id, description, created_at
                FROM user_activity_logs
                WHERE user_id = $1
                ORDER BY id
                """,
                user_id
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("fetching activities") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("fetching activities") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("fetching activities") from ex

        self._mark_database_operational()
        return [dict(row) for row in rows]
