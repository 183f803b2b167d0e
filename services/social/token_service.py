"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from datetime import datetime, timedelta, timezone
import logging
import typing
from jose import jwt, JWTError
from quipfeed_common.service_errors import Unauthenticated

TOKEN_ALGORITHM = "HS256"
DEFAULT_TOKEN_EXPIRY_HOURS = 72
BEARER_SCHEME = "bearer"


class TokenService:
    """
    Issues and verifies the signed, time-limited identity tokens handed out
    at login.

    Tokens are HS256 JWTs carrying the user id in ``sub`` and an ``exp``
    claim. The signing secret is supplied by the caller (configuration),
    so it can be rotated without a code change.
    """

    def __init__(self, secret: str,
                 logger: logging.Logger,
                 expiry_hours: int = DEFAULT_TOKEN_EXPIRY_HOURS) -> None:
        if not secret:
            raise ValueError("Token signing secret cannot be empty.")

        self._secret = secret
        self._expiry = timedelta(hours=expiry_hours)
        self._logger = logger.getChild(__name__)

    @property
    def expiry(self) -> timedelta:
        """ Lifetime of an issued token. """
        return self._expiry

    def issue_token(self, user_id: int,
                    issued_at: typing.Optional[datetime] = None) -> str:
        """
        Produce a signed token for ``user_id``.

        Args:
            user_id (int): Identity to embed in the token.
            issued_at (datetime): Issue instant, defaults to now (UTC).

        Returns:
            str: The encoded token.
        """
        issued_at = issued_at or datetime.now(timezone.utc)

        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._expiry).timestamp()),
        }

        return jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify_token(self, raw_token: str) -> int:
        """
        Validate a token's signature and expiry. A token must carry both
        ``exp`` and ``sub``.

        Returns:
            int: The user id embedded in the token.

        Raises:
            Unauthenticated: If the token is malformed, expired, signed with
                another secret or carries no usable user id.
        """
        if not raw_token:
            raise Unauthenticated()

        try:
            claims = jwt.decode(raw_token, self._secret,
                                algorithms=[TOKEN_ALGORITHM],
                                options={"require_exp": True,
                                         "require_sub": True})

        except JWTError as ex:
            self._logger.debug("Token rejected: %s", ex)
            raise Unauthenticated() from ex

        try:
            user_id = int(claims.get("sub"))
        except (TypeError, ValueError) as ex:
            self._logger.debug("Token rejected: invalid subject")
            raise Unauthenticated() from ex

        if user_id <= 0:
            raise Unauthenticated()

        return user_id

    @staticmethod
    def token_from_authorization_header(header: typing.Optional[str]) -> str:
        """
        Extract the token from an ``Authorization: Bearer <token>`` header.

        Raises:
            Unauthenticated: If the header is missing or not a bearer
                credential.
        """
        if not header:
            raise Unauthenticated()

        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
            raise Unauthenticated()

        return parts[1]

    def verify_authorization_header(self,
                                    header: typing.Optional[str]) -> int:
        """
        Extract and verify the token of an ``Authorization`` header.

        Returns:
            int: The caller's user id.
        """
        return self.verify_token(self.token_from_authorization_header(header))
