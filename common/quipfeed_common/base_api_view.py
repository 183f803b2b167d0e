"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import typing
import pydantic
import quart
from quipfeed_common.service_errors import InvalidInput, NotFound, ServiceError

# Largest value a PostgreSQL INTEGER (int4) column holds.
MAX_INTEGER_VALUE = 2**31 - 1


class BaseApiView:
    """
    Base class for API views.

    Provides the request-body parsing and response helpers shared by every
    view, so that all handlers return the same JSON envelope: either the
    resource (or a ``{message, resource}`` pair) on success, or
    ``{"message": ...}`` with the error status on failure.
    """
    # pylint: disable=too-few-public-methods

    async def _parse_request_body(self, model: typing.Type[pydantic.BaseModel]):
        """
        Parse the JSON request body into a pydantic request model.

        Args:
            model: Pydantic model class describing the expected body.

        Returns:
            An instance of ``model``.

        Raises:
            InvalidInput: If the body is missing, is not a JSON object or
                fails validation.
        """
        data = await quart.request.get_json(silent=True)

        if not isinstance(data, dict):
            raise InvalidInput("invalid request body")

        try:
            return model(**data)

        except pydantic.ValidationError as ex:
            fields = sorted({".".join(str(part) for part in err["loc"])
                             for err in ex.errors()})
            raise InvalidInput(f"invalid input: {', '.join(fields)}") from ex

    @staticmethod
    def _parse_resource_id(raw_id: str, resource_name: str) -> int:
        try:
            resource_id = int(raw_id)
        except (TypeError, ValueError) as ex:
            raise InvalidInput(f"invalid {resource_name} ID") from ex

        if resource_id <= 0:
            raise InvalidInput(f"invalid {resource_name} ID")

        # No row can carry an id beyond the column range.
        if resource_id > MAX_INTEGER_VALUE:
            raise NotFound(f"{resource_name} not found")

        return resource_id

    @staticmethod
    def _error_response(error: ServiceError):
        return quart.jsonify({"message": error.message}), error.status

    @staticmethod
    def _result_response(result: dict):
        """
        Convert a data service result into a response. The result carries
        its HTTP status under the ``status`` key, which is not returned to
        the client.
        """
        status = result.get("status", HTTPStatus.OK)
        return quart.jsonify({k: v for k, v in result.items()
                              if k != "status"}), status
