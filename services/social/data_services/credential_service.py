"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from http import HTTPStatus
import logging
import typing
from passlib.hash import bcrypt
from quipfeed_common.service_errors import InvalidCredentials
from data_access_layer.user_data_access_layer import UserDataAccessLayer
from token_service import TokenService


class CredentialService:
    """
    Registration and login logic on top of the user data access layer.
    """

    # Hash compared against when the email is unknown, so that a login for
    # an unknown account costs the same bcrypt round as a wrong password.
    _dummy_hash: typing.Optional[str] = None

    def __init__(self, user_dal: UserDataAccessLayer,
                 token_service: TokenService,
                 logger: logging.Logger):
        self._user_dal = user_dal
        self._token_service = token_service
        self._logger = logger.getChild(__name__)

    async def register(self,
                       full_name: str,
                       email: str,
                       username: str,
                       password: str,
                       age: int) -> dict:
        """
        Handles user registration:
         - Hashes the password (bcrypt, salted)
         - Creates the user, relying on the unique constraints to detect
           a taken email or username

        Raises:
            DuplicateIdentity: Email or username already registered.
            StorageFailure: The user could not be stored.
        """
        # pylint: disable=too-many-arguments, too-many-positional-arguments
        password_hash = bcrypt.hash(password)

        user_id = await self._user_dal.create_user(
            full_name=full_name,
            email=email,
            username=username,
            password_hash=password_hash,
            age=age
        )

        return {
            "message": "User registered successfully",
            "user_id": user_id,
            "email": email,
            "status": HTTPStatus.CREATED
        }

    async def verify_credentials(self, email: str, password: str) -> dict:
        """
        Check an email and password pair.

        Returns:
            dict: ``user_id`` and ``email`` of the matching user.

        Raises:
            InvalidCredentials: Unknown email or wrong password; both cases
                raise the same error.
        """
        user = await self._user_dal.get_by_email(email)

        if user is None:
            bcrypt.verify(password, self._get_dummy_hash())
            raise InvalidCredentials()

        try:
            matches = bcrypt.verify(password, user["password"])

        except (TypeError, ValueError):
            self._logger.error("Stored password hash for user %d is "
                               "unusable", user["id"])
            matches = False

        if not matches:
            raise InvalidCredentials()

        return {"user_id": user["id"], "email": user["email"]}

    async def login(self, email: str, password: str) -> dict:
        """
        Handles user login: verifies the credentials and issues a token.
        """
        user = await self.verify_credentials(email, password)

        token = self._token_service.issue_token(user["user_id"])
        self._logger.info("User %d logged in", user["user_id"])

        return {"token": token, "status": HTTPStatus.OK}

    @classmethod
    def _get_dummy_hash(cls) -> str:
        if cls._dummy_hash is None:
            cls._dummy_hash = bcrypt.hash("quipfeed-unknown-account")
        return cls._dummy_hash
