"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import logging
import re
import typing
from pydantic import BaseModel, EmailStr, Field, field_validator
import quart
from quipfeed_common.base_api_view import BaseApiView, MAX_INTEGER_VALUE
from quipfeed_common.service_errors import ServiceError
from data_access_layer.user_data_access_layer import UserDataAccessLayer
from data_services.credential_service import CredentialService
from state_object import StateObject
from token_service import TokenService

USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,32}$"


# --- Request Models ---
class RegisterRequest(BaseModel):
    """
    Request model for registering a new account.

    Attributes:
        full_name (str): Display name, non-blank.
        email (EmailStr): Email address, used to log in.
        username (str): 3 to 32 letters, digits or underscores.
        password (str): At least 8 characters, with at least one letter and
            one digit.
        age (int): Age of the user, greater than zero.
    """
    full_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    username: str = Field(pattern=USERNAME_PATTERN)
    password: str = Field(min_length=8, max_length=72)
    age: int = Field(gt=0, le=MAX_INTEGER_VALUE)

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full name cannot be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_complexity(cls, value: str) -> str:
        if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
            raise ValueError("password must contain a letter and a digit")
        return value


class LoginRequest(BaseModel):
    """
    Request body for logging in.

    Attributes:
        email (EmailStr): Email address of the account.
        password (str): The plaintext password, checked against the stored
            hash.
    """
    email: EmailStr
    password: str = Field(min_length=1)


class AuthApiView(BaseApiView):
    """
    API view handling user registration and login.
    """

    def __init__(self, logger: logging.Logger,
                 state_object: StateObject,
                 token_service: TokenService,
                 write_timeout: typing.Optional[float] = None) -> None:
        self._logger = logger.getChild(__name__)
        self._state_object = state_object
        self._token_service = token_service
        self._write_timeout = write_timeout

    async def register(self):
        """
        Handle user registration.

        Returns:
            tuple: (JSON response, HTTP status code)
                - 201 Created: ``{message, user_id, email}``.
                - 400 Bad Request: Invalid request body.
                - 409 Conflict: Email or username already registered.
                - 500 Internal Server Error: Storage failure.
        """
        try:
            req = await self._parse_request_body(RegisterRequest)

            result = await self._create_service().register(
                req.full_name, req.email, req.username, req.password, req.age
            )

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    async def login(self):
        """
        Handle user login via email and password.

        Returns:
            JSON response with:
                - 200 OK: ``{token}``.
                - 400 Bad Request: Invalid request body.
                - 401 Unauthorized: Invalid credentials.
        """
        try:
            req = await self._parse_request_body(LoginRequest)

            result = await self._create_service().login(req.email,
                                                        req.password)

        except ServiceError as ex:
            return self._error_response(ex)

        return self._result_response(result)

    def _create_service(self) -> CredentialService:
        user_dal = UserDataAccessLayer(quart.g.db, self._logger,
                                       self._state_object,
                                       self._write_timeout)
        return CredentialService(user_dal, self._token_service, self._logger)
