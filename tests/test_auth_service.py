"""Tests for acquisitions.services.auth_service: signup, signin and session token."""

import unittest
from unittest.mock import patch

from acquisitions.core.errors import (
    HashingError,
    SignInFailed,
    StoreError,
    UserCreationFailed,
    UserExistsError,
)
from acquisitions.core.security import verify_password, verify_token
from acquisitions.models import User
from acquisitions.services.auth_service import create_session_token, sign_in_user, signup
from acquisitions.services.user_store import UserStore
from tests.support import make_session_factory


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session_factory()()

    def tearDown(self) -> None:
        self.session.close()


class TestSignup(AuthServiceTestCase):
    def test_creates_user_with_public_projection(self) -> None:
        user = signup(self.session, "a@x.com", "A", "secret1")
        self.assertEqual(user.email, "a@x.com")
        self.assertEqual(user.name, "A")
        self.assertEqual(user.role, "user")
        self.assertIsNotNone(user.id)
        dumped = user.model_dump(by_alias=True)
        self.assertNotIn("password", dumped)
        self.assertNotIn("password_hash", dumped)
        self.assertIn("createdAt", dumped)

    def test_stores_hash_not_plaintext(self) -> None:
        user = signup(self.session, "a@x.com", "A", "secret1")
        row = self.session.get(User, user.id)
        self.assertNotEqual(row.password_hash, "secret1")
        self.assertTrue(verify_password("secret1", row.password_hash))

    def test_explicit_role(self) -> None:
        user = signup(self.session, "admin@x.com", "Admin", "secret1", role="admin")
        self.assertEqual(user.role, "admin")

    def test_duplicate_email_fails_uniformly(self) -> None:
        signup(self.session, "a@x.com", "A", "secret1")
        with self.assertRaises(UserExistsError) as ctx:
            signup(self.session, "a@x.com", "Someone Else", "another1")
        self.assertIsInstance(ctx.exception, UserCreationFailed)
        self.assertEqual(ctx.exception.message, "User creation failed")

    def test_concurrent_insert_race_surfaces_as_user_exists(self) -> None:
        signup(self.session, "a@x.com", "A", "secret1")
        # Simulate a second request that passed the pre-check before the first committed.
        with patch.object(UserStore, "find_by_email", return_value=None):
            with self.assertRaises(UserExistsError):
                signup(self.session, "a@x.com", "B", "secret2")
        self.assertEqual(self.session.query(User).count(), 1)

    def test_hash_failure_collapses_to_creation_failed(self) -> None:
        with patch(
            "acquisitions.services.auth_service.hash_password", side_effect=HashingError()
        ):
            with self.assertRaises(UserCreationFailed) as ctx:
                signup(self.session, "a@x.com", "A", "secret1")
        self.assertNotIsInstance(ctx.exception, UserExistsError)
        self.assertEqual(ctx.exception.message, "User creation failed")
        self.assertIsInstance(ctx.exception.cause, HashingError)

    def test_store_failure_collapses_to_creation_failed(self) -> None:
        with patch.object(UserStore, "insert", side_effect=StoreError()):
            with self.assertRaises(UserCreationFailed) as ctx:
                signup(self.session, "a@x.com", "A", "secret1")
        self.assertEqual(ctx.exception.message, "User creation failed")

    def test_missing_row_after_insert_collapses_to_creation_failed(self) -> None:
        with patch.object(UserStore, "insert", return_value=None):
            with self.assertRaises(UserCreationFailed):
                signup(self.session, "a@x.com", "A", "secret1")


class TestSignIn(AuthServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.created = signup(self.session, "a@x.com", "A", "secret1")

    def test_correct_credentials(self) -> None:
        user = sign_in_user(self.session, "a@x.com", "secret1")
        self.assertEqual(user, self.created)

    def test_wrong_password_and_unknown_email_are_indistinguishable(self) -> None:
        self.assertIsNone(sign_in_user(self.session, "a@x.com", "wrong-password"))
        self.assertIsNone(sign_in_user(self.session, "nobody@x.com", "secret1"))

    def test_malformed_stored_hash_raises_sign_in_failed(self) -> None:
        UserStore(self.session).insert(
            email="broken@x.com", name="B", password_hash="not-a-hash", role="user"
        )
        with self.assertRaises(SignInFailed) as ctx:
            sign_in_user(self.session, "broken@x.com", "secret1")
        self.assertEqual(ctx.exception.message, "Sign in failed")

    def test_store_failure_raises_sign_in_failed(self) -> None:
        with patch.object(UserStore, "find_by_email", side_effect=StoreError()):
            with self.assertRaises(SignInFailed):
                sign_in_user(self.session, "a@x.com", "secret1")


class TestSessionToken(AuthServiceTestCase):
    def test_token_carries_identity(self) -> None:
        user = signup(self.session, "a@x.com", "A", "secret1", role="admin")
        payload = verify_token(create_session_token(user))
        self.assertEqual((payload.id, payload.email, payload.role), (user.id, "a@x.com", "admin"))


if __name__ == "__main__":
    unittest.main()
