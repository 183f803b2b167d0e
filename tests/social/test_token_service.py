from datetime import datetime, timedelta, timezone
import logging
import unittest
from jose import jwt
from quipfeed_common.service_errors import Unauthenticated
from token_service import TokenService, TOKEN_ALGORITHM


class TestTokenService(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("test_logger")
        self.logger.addHandler(logging.NullHandler())
        self.service = TokenService("first-secret", self.logger)

    def test_empty_secret_rejected(self):
        with self.assertRaises(ValueError):
            TokenService("", self.logger)

    def test_issued_token_verifies_to_user_id(self):
        token = self.service.issue_token(42)
        self.assertEqual(self.service.verify_token(token), 42)

    def test_token_expires_after_72_hours(self):
        now = datetime.now(timezone.utc)
        claims = jwt.get_unverified_claims(
            self.service.issue_token(7, issued_at=now))

        self.assertEqual(claims["sub"], "7")
        self.assertEqual(claims["exp"] - claims["iat"], 72 * 3600)

    def test_token_still_valid_just_before_expiry(self):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=71)
        token = self.service.issue_token(5, issued_at=issued_at)

        self.assertEqual(self.service.verify_token(token), 5)

    def test_expired_token_rejected(self):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=73)
        token = self.service.issue_token(5, issued_at=issued_at)

        with self.assertRaises(Unauthenticated):
            self.service.verify_token(token)

    def test_token_from_other_secret_rejected(self):
        other = TokenService("second-secret", self.logger)
        token = other.issue_token(5)

        with self.assertRaises(Unauthenticated):
            self.service.verify_token(token)

    def test_malformed_token_rejected(self):
        with self.assertRaises(Unauthenticated):
            self.service.verify_token("not.a.token")

        with self.assertRaises(Unauthenticated):
            self.service.verify_token("")

    def test_token_without_numeric_subject_rejected(self):
        expiry = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "alice", "exp": int(expiry.timestamp())},
                           "first-secret", algorithm=TOKEN_ALGORITHM)

        with self.assertRaises(Unauthenticated):
            self.service.verify_token(token)

    def test_token_without_expiry_rejected(self):
        token = jwt.encode({"sub": "5"}, "first-secret",
                           algorithm=TOKEN_ALGORITHM)

        with self.assertRaises(Unauthenticated):
            self.service.verify_token(token)

    def test_token_without_subject_rejected(self):
        expiry = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"exp": int(expiry.timestamp())}, "first-secret",
                           algorithm=TOKEN_ALGORITHM)

        with self.assertRaises(Unauthenticated):
            self.service.verify_token(token)

    def test_configured_expiry(self):
        service = TokenService("first-secret", self.logger, expiry_hours=1)
        issued_at = datetime.now(timezone.utc) - timedelta(hours=2)

        self.assertEqual(service.expiry, timedelta(hours=1))
        with self.assertRaises(Unauthenticated):
            service.verify_token(service.issue_token(1, issued_at=issued_at))


class TestAuthorizationHeader(unittest.TestCase):
    def setUp(self):
        logger = logging.getLogger("test_logger")
        self.service = TokenService("first-secret", logger)

    def test_bearer_header(self):
        token = self.service.issue_token(9)
        self.assertEqual(
            self.service.verify_authorization_header(f"Bearer {token}"), 9)
        self.assertEqual(
            self.service.verify_authorization_header(f"bearer {token}"), 9)

    def test_missing_header(self):
        with self.assertRaises(Unauthenticated):
            self.service.verify_authorization_header(None)

    def test_unparseable_headers(self):
        for header in ["Bearer", "Basic abc", "Bearer a b", "token"]:
            with self.subTest(header=header):
                with self.assertRaises(Unauthenticated):
                    TokenService.token_from_authorization_header(header)
