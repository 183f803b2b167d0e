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

POST_COLUMNS = "id, content, image_url, user_id"


class PostDataAccessLayer(BaseDataAccessLayer):
    """ Storage of posts. """

    async def create_post(self, content: str, image_url: str,
                          user_id: int) -> dict:
        """
        Insert a post owned by ``user_id``.

        Returns:
            dict: The stored post (``id``, ``content``, ``image_url``,
            ``user_id``).
        """
        try:
            post = await self._db.fetchrow(
                f"""
                INSERT INTO posts (content, image_url, user_id)
                VALUES ($1, $2, $3)
                RETURNING {POST_COLUMNS}
                """,
                content, image_url, user_id,
                timeout=self._write_timeout
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("creating post") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("creating post") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("creating post") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("creating post (timed out)") from ex

        self._mark_database_operational()
        return dict(post)

    async def list_posts(self) -> list[dict]:
        try:
            rows = await self._db.fetch(
                f"SELECT {POST_COLUMNS} FROM posts ORDER BY id")

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("listing posts") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("listing posts") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("listing posts") from ex

        self._mark_database_operational()
        return [dict(row) for row in rows]

    async def get_post(self, post_id: int) -> typing.Optional[dict]:
        try:
            post = await self._db.fetchrow(
                f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1", post_id)

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("fetching post") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("fetching post") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("fetching post") from ex

        self._mark_database_operational()
        return dict(post) if post is not None else None

    async def get_post_owner(self, post_id: int) -> typing.Optional[int]:
        """
        Returns:
            int | None: Id of the user owning the post, None if the post
            does not exist.
        """
        try:
            owner_id = await self._db.fetchval(
                "SELECT user_id FROM posts WHERE id = $1", post_id)

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("validating post ownership") \
                from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("validating post ownership") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("validating post ownership") from ex

        self._mark_database_operational()
        return owner_id

    async def list_comments_for_post(self, post_id: int) -> list[dict]:
        """
        Returns:
            list[dict]: The post's comments in id order, each with
            ``id``, ``content``, ``author_id`` and ``author_name`` (the
            author's full name).
        """
        try:
            rows = await self._db.fetch(
                """
                SELECT c.id, c.content, c.author_id, u.full_name AS author_name
                FROM comments c
                JOIN users u ON c.author_id = u.id
                WHERE c.post_id = $1
                ORDER BY c.id
                """,
                post_id
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("fetching comments") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("fetching comments") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("fetching comments") from ex

        self._mark_database_operational()
        return [dict(row) for row in rows]

    async def delete_post(self, post_id: int) -> None:
        """
        Delete a post together with its comments, in one transaction.
        """
        try:
            async with self._db.transaction():
                await self._db.execute(
                    "DELETE FROM comments WHERE post_id = $1", post_id,
                    timeout=self._write_timeout)
                await self._db.execute(
                    "DELETE FROM posts WHERE id = $1", post_id,
                    timeout=self._write_timeout)

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("deleting post") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("deleting post") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("deleting post") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("deleting post (timed out)") from ex

        self._mark_database_operational()
        self._logger.info("Deleted post %d and its comments", post_id)
