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
from quipfeed_common.service_errors import NotFound

# PostgreSQL default name of the comments.author_id foreign key.
AUTHOR_FOREIGN_KEY = "comments_author_id_fkey"


class CommentDataAccessLayer(BaseDataAccessLayer):
    """ Storage of comments. """

    async def create_comment(self, content: str, post_id: int,
                             author_id: int) -> dict:
        """
        Insert a comment.

        Returns:
            dict: The stored comment (``id``, ``content``, ``post_id``,
            ``author_id``).

        Raises:
            NotFound: If ``post_id`` does not reference an existing post, or
                the author row has gone.
        """
        try:
            comment = await self._db.fetchrow(
                """
                INSERT INTO comments (content, post_id, author_id)
                VALUES ($1, $2, $3)
                RETURNING id, content, post_id, author_id
                """,
                content, post_id, author_id,
                timeout=self._write_timeout
            )

        except asyncpg.ForeignKeyViolationError as ex:
            if ex.constraint_name == AUTHOR_FOREIGN_KEY:
                self._logger.warning("Comment author %d no longer exists",
                                     author_id)
                raise NotFound("user not found") from ex

            self._logger.debug("Comment references unknown post %d", post_id)
            raise NotFound("post not found") from ex

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("creating comment") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("creating comment") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("creating comment") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("creating comment (timed out)") from ex

        self._mark_database_operational()
        return dict(comment)

    async def get_comment_details(self,
                                  comment_id: int) -> typing.Optional[dict]:
        """
        Fetch a comment joined with its post and author.

        Returns:
            dict | None: The comment columns plus ``post_content`` and
            ``author_name``, or None if the comment does not exist.
        """
        try:
            row = await self._db.fetchrow(
                """
                SELECT c.id, c.content, c.post_id, c.author_id,
                       p.content AS post_content, u.full_name AS author_name
                FROM comments c
                JOIN posts p ON c.post_id = p.id
                JOIN users u ON c.author_id = u.id
                WHERE c.id = $1
                """,
                comment_id
            )

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("fetching comment") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("fetching comment") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("fetching comment") from ex

        self._mark_database_operational()
        return dict(row) if row is not None else None

    async def get_comment_author(self,
                                 comment_id: int) -> typing.Optional[int]:
        try:
            author_id = await self._db.fetchval(
                "SELECT author_id FROM comments WHERE id = $1", comment_id)

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("validating comment ownership") \
                from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("validating comment ownership") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("validating comment ownership") from ex

        self._mark_database_operational()
        return author_id

    async def delete_comment(self, comment_id: int) -> None:
        try:
            await self._db.execute("DELETE FROM comments WHERE id = $1",
                                   comment_id, timeout=self._write_timeout)

        except asyncpg.PostgresConnectionError as ex:
            raise self._connection_failure("deleting comment") from ex

        except asyncpg.exceptions.DataError as ex:
            raise self._invalid_argument("deleting comment") from ex

        except (asyncpg.PostgresError, asyncpg.InterfaceError) as ex:
            raise self._query_failure("deleting comment") from ex

        except asyncio.TimeoutError as ex:
            raise self._query_failure("deleting comment (timed out)") from ex

        self._mark_database_operational()
