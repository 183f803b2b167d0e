"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import asyncio
import os
import random
from quart import g, Quart, request
import asyncpg
from quipfeed_common.route_decorators import is_auth_required, route_uses_db
from application import Application


# Quart application instance
app = Quart(__name__)

SERVICE_APP: Application = Application(app)


class DatabaseConfig:
    """
    Database connection settings, read from the environment.

    Attributes:
        DB_USER (str): Database username, ``QUIPFEED_SOCIAL_DB_USER``.
            Defaults to "__INVALID__".
        DB_PASSWORD (str): Database password, ``QUIPFEED_SOCIAL_DB_PASSWORD``.
            Defaults to "__INVALID__".
        DB_NAME (str): Database name, ``QUIPFEED_SOCIAL_DB_NAME``.
            Defaults to "__INVALID__".
        DB_HOST (str): Database host, ``QUIPFEED_SOCIAL_DB_HOST``.
            Defaults to "127.0.0.1".
        DB_PORT (int): Database port, ``QUIPFEED_SOCIAL_DB_PORT``.
            Defaults to 5432.
    """
    # pylint: disable=too-few-public-methods
    DB_USER = os.getenv("QUIPFEED_SOCIAL_DB_USER", "__INVALID__")
    DB_PASSWORD = os.getenv("QUIPFEED_SOCIAL_DB_PASSWORD", "__INVALID__")
    DB_NAME = os.getenv("QUIPFEED_SOCIAL_DB_NAME", "__INVALID__")
    DB_HOST = os.getenv("QUIPFEED_SOCIAL_DB_HOST", "127.0.0.1")
    DB_PORT = int(os.getenv("QUIPFEED_SOCIAL_DB_PORT", "5432"))


DB_ACQUIRE_TIMEOUT = 2.0


async def cancel_background_tasks():
    """
    Cancel and await the application's background task, if it exists.

    The task is stored on ``app.background_task`` by ``startup``. Any
    ``asyncio.CancelledError`` raised while it winds down is suppressed.
    """
    task = getattr(app, "background_task", None)
    if task:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


@app.before_serving
async def startup() -> None:
    """
    Code executed before Quart has begun serving http requests: initialise
    the service, create the connection pool and start the service task.
    """
    if not await SERVICE_APP.initialise():
        os._exit(1)

    app.db_pool = await create_db_pool(DatabaseConfig)

    app.background_task = asyncio.create_task(SERVICE_APP.run())


@app.after_serving
async def shutdown() -> None:
    """
    Code executed after Quart has stopped serving http requests: stop the
    service and close the connection pool.
    """
    SERVICE_APP.shutdown_event.set()

    if app is None:
        print("[WARN] app is None on shutdown, skipping cleanup", flush=True)
        return

    await cancel_background_tasks()
    await SERVICE_APP.stop()

    db_pool = getattr(app, "db_pool", None)
    if db_pool is not None:
        await db_pool.close()


@app.before_request
async def acquire_connection():
    """
    Check a database connection out of the pool for the request and store
    it as ``g.db``.

    Routes marked with ``route_not_using_db`` (and requests that match no
    route) are served without a connection, as are requests to token-gated
    routes that carry no ``Authorization`` header.

    Returns:
        tuple | None: A JSON error with 503 if no connection became free
            within the acquire timeout, otherwise None to continue.
    """
    view_func = app.view_functions.get(request.endpoint)
    if not route_uses_db(view_func):
        return None

    if is_auth_required(view_func) and "Authorization" not in request.headers:
        return None

    try:
        g.db = await app.db_pool.acquire(timeout=DB_ACQUIRE_TIMEOUT)

    except asyncio.TimeoutError:
        return {"message": "Service unavailable"}, 503

    return None


@app.after_request
async def release_connection(response):
    """
    Return the request's database connection, if any, to the pool.

    Returns:
        quart.wrappers.Response: The same response object, unchanged.
    """
    db = getattr(g, "db", None)
    if db is not None:
        await app.db_pool.release(db)
        g.db = None
    return response


async def create_db_pool(config,
                         retries: int = 5,
                         base_delay: float = 1.0
                         ) -> asyncpg.pool.Pool:
    """
    Create and return an asyncpg connection pool with retries and error
    handling.

    Retry-able errors are retried with exponential backoff and jitter.
    Authentication failures and a missing database are not retried. If no
    pool can be created the background task is cancelled and the process
    exits.

    Args:
        config (DatabaseConfig): Database connection parameters.
        retries (int, optional): Maximum number of attempts. Defaults to 5.
        base_delay (float, optional): Base delay (in seconds) for
            exponential backoff. Defaults to 1.0.

    Returns:
        asyncpg.pool.Pool: The connection pool.
    """
    for attempt in range(1, retries + 1):
        try:
            pool = await asyncpg.create_pool(
                user=config.DB_USER,
                password=config.DB_PASSWORD,
                database=config.DB_NAME,
                host=config.DB_HOST,
                port=config.DB_PORT,
                min_size=1,
                max_size=10,
                timeout=5.0
            )

            print(f"[INFO] Connected to database {config.DB_NAME} "
                  f"on {config.DB_HOST}:{config.DB_PORT} (attempt {attempt})",
                  flush=True)

            return pool

        except asyncpg.InvalidPasswordError:
            print("[FATAL] Database authentication failed (check user/"
                  "password).", flush=True)
            break

        except asyncpg.InvalidCatalogNameError:
            print(f"[FATAL] Database '{config.DB_NAME}' does not exist.",
                  flush=True)
            break

        except asyncpg.CannotConnectNowError:
            print("[ERROR] Database is starting up or cannot accept "
                  "connections right now.", flush=True)

        except asyncio.TimeoutError:
            print("[ERROR] Database connection timed out.", flush=True)

        except OSError as ex:
            print(f"[ERROR] Database network/connection error: {ex}",
                  flush=True)

        except asyncpg.PostgresError as ex:
            print(f"[ERROR] Database general Postgres error: {ex}",
                  flush=True)

        if attempt < retries:
            delay = base_delay * (2 ** (attempt - 1))
            wait_time = delay + random.uniform(0, 0.3 * delay)
            print(f"[INFO] Retrying database connection in "
                  f"{wait_time:.1f}s...", flush=True)
            await asyncio.sleep(wait_time)
            continue

        print("[FATAL] All database retries exhausted. Could not connect!",
              flush=True)

    if app is not None:
        await cancel_background_tasks()

    os._exit(1)
