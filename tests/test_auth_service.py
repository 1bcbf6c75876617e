"""
Credential store and token checks.
Run from project root: python -m pytest tests/test_auth_service.py -v
"""
import unittest

import jwt

from config import settings
from repositories import users
from schemas.auth import UserPublic
from services import auth
from services.errors import ConflictError, ForbiddenError, UnauthorizedError, ValidationError
from tests.support import DatabaseTestCase


class TestSignupAndLogin(DatabaseTestCase):
    async def test_signup_stores_hash_not_plaintext(self):
        user_id = await auth.signup(self.session, "alice", "pw1")
        user = await users.get_by_username(self.session, "alice")
        self.assertEqual(user.id, user_id)
        self.assertEqual(user.role, "user")
        self.assertNotEqual(user.password_hash, "pw1")
        self.assertTrue(auth.verify_password("pw1", user.password_hash))

    async def test_duplicate_username_conflicts(self):
        await auth.signup(self.session, "alice", "pw1")
        with self.assertRaises(ConflictError):
            await auth.signup(self.session, "alice", "another")

    async def test_missing_fields_are_rejected(self):
        for username, password in (("", "pw"), ("bob", ""), (None, "pw"), ("bob", None), ("   ", "pw")):
            with self.subTest(username=username, password=password):
                with self.assertRaises(ValidationError):
                    await auth.signup(self.session, username, password)

    async def test_overlong_password_is_rejected(self):
        with self.assertRaises(ValidationError):
            await auth.signup(self.session, "carol", "x" * 73)

    async def test_login_returns_token_with_identity(self):
        user_id = await auth.signup(self.session, "alice", "pw1")
        token, user = await auth.login(self.session, "alice", "pw1")
        self.assertEqual(user, UserPublic(id=user_id, username="alice", role="user"))
        self.assertEqual(auth.verify_token(token), user)

        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        self.assertEqual(claims["exp"] - claims["iat"], settings.access_token_expire_minutes * 60)

    async def test_bad_credentials_are_indistinguishable(self):
        await auth.signup(self.session, "alice", "pw1")
        with self.assertRaises(UnauthorizedError) as wrong_password:
            await auth.login(self.session, "alice", "nope")
        with self.assertRaises(UnauthorizedError) as unknown_user:
            await auth.login(self.session, "mallory", "pw1")
        self.assertEqual(wrong_password.exception.message, unknown_user.exception.message)
        self.assertEqual(wrong_password.exception.message, "Invalid username or password")

    async def test_login_requires_both_fields(self):
        with self.assertRaises(ValidationError):
            await auth.login(self.session, "alice", "")


class TestVerifyToken(unittest.TestCase):
    def setUp(self):
        self.user = UserPublic(id=7, username="alice", role="admin")

    def test_missing_token_is_unauthorized(self):
        for token in (None, ""):
            with self.subTest(token=token):
                with self.assertRaises(UnauthorizedError):
                    auth.verify_token(token)

    def test_expired_token_is_forbidden(self):
        token = auth.create_access_token(self.user, expires_minutes=-1)
        with self.assertRaises(ForbiddenError):
            auth.verify_token(token)

    def test_foreign_signature_is_forbidden(self):
        token = jwt.encode({"id": 7, "username": "alice", "role": "admin"}, "other-secret", algorithm="HS256")
        with self.assertRaises(ForbiddenError):
            auth.verify_token(token)

    def test_garbage_token_is_forbidden(self):
        with self.assertRaises(ForbiddenError):
            auth.verify_token("not.a.jwt")

    def test_token_without_identity_claims_is_forbidden(self):
        token = jwt.encode({"sub": "7"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with self.assertRaises(ForbiddenError):
            auth.verify_token(token)

    def test_role_round_trips(self):
        self.assertEqual(auth.verify_token(auth.create_access_token(self.user)).role, "admin")


if __name__ == "__main__":
    unittest.main()
