"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""

NO_DB_ATTRIBUTE = "_no_db"
AUTH_REQUIRED_ATTRIBUTE = "_auth_required"


def route_not_using_db(func):
    """
    Decorator to mark a route handler as not requiring database access.

    The ``before_request`` hook of a service checks for the marker with
    ``route_uses_db`` and skips checking a connection out of the pool for
    the request.

    Args:
        func (Callable): The route handler function to decorate.

    Returns:
        Callable: The same function with the marker attribute set.
    """
    setattr(func, NO_DB_ATTRIBUTE, True)
    return func


def route_uses_db(func) -> bool:
    """
    Returns:
        bool: False if ``func`` was marked with ``route_not_using_db`` or is
        None (no matching route), True otherwise.
    """
    if func is None:
        return False

    return not getattr(func, NO_DB_ATTRIBUTE, False)


def route_requires_auth(func):
    """
    Mark a route handler as served only to callers presenting an
    ``Authorization`` header. The ``before_request`` hook skips the pool
    checkout for such a route when the header is absent, since the handler
    will answer 401 without touching the database.
    """
    setattr(func, AUTH_REQUIRED_ATTRIBUTE, True)
    return func


def is_auth_required(func) -> bool:
    return func is not None and getattr(func, AUTH_REQUIRED_ATTRIBUTE, False)
