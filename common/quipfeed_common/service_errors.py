"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import typing


class ServiceError(Exception):
    """
    Base class for failures that are reported to API clients.

    Every subclass carries a short, human-readable message that is safe to
    return to a client and the HTTP status that encodes the error kind.
    Internal details (driver errors, stack traces) are logged where the
    error is raised and never placed in the message.

    Attributes:
        message (str): Client-safe description of the failure.
        status (HTTPStatus): HTTP status for the error response.
    """
    default_message: str = "Internal server error"
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: typing.Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ServiceError):
    """ Malformed or missing request fields. """
    default_message = "invalid input"
    status = HTTPStatus.BAD_REQUEST


class Unauthenticated(ServiceError):
    """ Missing, malformed, expired or wrongly signed token. """
    default_message = "not authorized"
    status = HTTPStatus.UNAUTHORIZED


class InvalidCredentials(ServiceError):
    """ Unknown email or wrong password, deliberately indistinguishable. """
    default_message = "Invalid email or password"
    status = HTTPStatus.UNAUTHORIZED


class Forbidden(ServiceError):
    """ Authenticated caller does not own the target resource. """
    default_message = "forbidden"
    status = HTTPStatus.FORBIDDEN


class NotFound(ServiceError):
    """ The requested resource id does not exist. """
    default_message = "not found"
    status = HTTPStatus.NOT_FOUND


class DuplicateIdentity(ServiceError):
    """ Registration conflicts with an existing email or username. """
    default_message = "Email or username already registered"
    status = HTTPStatus.CONFLICT


class DependencyFailure(ServiceError):
    """ An external service could not be used. """
    default_message = "external service unavailable"
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class StorageFailure(ServiceError):
    """ The database is unavailable or a statement failed. """
    default_message = "database operation failed"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
