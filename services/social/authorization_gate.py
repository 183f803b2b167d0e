"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import functools
import logging
import quart
from quipfeed_common.route_decorators import route_requires_auth
from quipfeed_common.service_errors import Forbidden, Unauthenticated
from token_service import TokenService


class AuthorizationGate:
    """
    Per-request authorization checks.

    ``require_authenticated`` wraps a route handler so that the handler only
    runs once the caller's bearer token has been verified; the verified
    user id is then available as ``quart.g.user_id``. ``require_ownership``
    is the ownership rule used by the delete operations.
    """

    def __init__(self, token_service: TokenService,
                 logger: logging.Logger) -> None:
        self._token_service = token_service
        self._logger = logger.getChild(__name__)

    def require_authenticated(self, func):
        """
        Route decorator rejecting requests without a valid bearer token.

        On failure the wrapped handler is never called and the response is
        ``{"message": "not authorized"}`` with 401.
        """

        @route_requires_auth
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            header = quart.request.headers.get("Authorization")

            try:
                user_id = self._token_service.verify_authorization_header(
                    header)

            except Unauthenticated as ex:
                self._logger.debug("Rejected unauthenticated request to %s",
                                   quart.request.path)
                return quart.jsonify({"message": ex.message}), ex.status

            quart.g.user_id = user_id
            return await func(*args, **kwargs)

        return wrapper

    @staticmethod
    def require_ownership(resource_owner_id: int, caller_id: int,
                          resource_name: str) -> None:
        """
        Raises:
            Forbidden: If the caller does not own the resource.
        """
        if resource_owner_id != caller_id:
            raise Forbidden(
                f"you are not authorized to delete this {resource_name}")
