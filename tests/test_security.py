"""Unit tests for acquisitions.core.security: bcrypt hashing and JWT session tokens."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import jwt
from pydantic import SecretStr

from acquisitions.core.config import get_settings
from acquisitions.core.errors import ComparisonError, HashingError, InvalidTokenError
from acquisitions.core.security import (
    DEV_FALLBACK_SECRET,
    get_signing_secret,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from acquisitions.schemas.auth import TokenPayload


class TestHashPassword(unittest.TestCase):
    """hash_password salts every call; verify_password checks against the stored hash."""

    def test_hash_verifies(self) -> None:
        hashed = hash_password("secret1")
        self.assertTrue(verify_password("secret1", hashed))

    def test_hash_is_not_plaintext_and_fixed_length(self) -> None:
        hashed = hash_password("secret1")
        self.assertNotIn("secret1", hashed)
        self.assertEqual(len(hashed), 60)
        self.assertEqual(len(hash_password("a much longer password value")), 60)

    def test_same_password_hashes_differently(self) -> None:
        first = hash_password("secret1")
        second = hash_password("secret1")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret1", first))
        self.assertTrue(verify_password("secret1", second))

    def test_wrong_password_is_false(self) -> None:
        hashed = hash_password("secret1")
        self.assertFalse(verify_password("secret2", hashed))
        self.assertFalse(verify_password("", hashed))

    def test_malformed_hash_raises_comparison_error(self) -> None:
        with self.assertRaises(ComparisonError):
            verify_password("secret1", "not-a-bcrypt-hash")

    def test_primitive_failure_raises_hashing_error(self) -> None:
        with patch("acquisitions.core.security.bcrypt.hashpw", side_effect=ValueError("boom")):
            with self.assertRaises(HashingError) as ctx:
                hash_password("secret1")
        self.assertEqual(ctx.exception.message, "Password hashing failed")

    def test_password_longer_than_72_bytes(self) -> None:
        long_password = "x" * 100
        hashed = hash_password(long_password)
        self.assertTrue(verify_password(long_password, hashed))

    def test_uses_configured_rounds(self) -> None:
        settings = MagicMock()
        settings.BCRYPT_ROUNDS = 5
        hashed = hash_password("secret1", settings)
        self.assertTrue(hashed.startswith("$2b$05$"))


class TestIssueAndVerifyToken(unittest.TestCase):
    """issue_token signs {id, email, role}; verify_token trusts nothing from a failed check."""

    def setUp(self) -> None:
        self.payload = TokenPayload(id=7, email="a@x.com", role="admin")

    def test_round_trip(self) -> None:
        token = issue_token(self.payload)
        decoded = verify_token(token)
        self.assertEqual(decoded, self.payload)

    def test_expiry_is_one_day(self) -> None:
        token = issue_token(self.payload)
        claims = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(claims["exp"] - claims["iat"], 24 * 60 * 60)

    def test_tampered_signature_rejected(self) -> None:
        header, body, signature = issue_token(self.payload).split(".")
        with self.assertRaises(InvalidTokenError):
            verify_token(f"{header}.{body}.{signature[::-1]}")

    def test_swapped_payload_rejected(self) -> None:
        token = issue_token(self.payload)
        other = issue_token(TokenPayload(id=8, email="b@x.com", role="user"))
        header, _, signature = token.split(".")
        forged_body = other.split(".")[1]
        with self.assertRaises(InvalidTokenError):
            verify_token(f"{header}.{forged_body}.{signature}")

    def test_truncated_token_rejected(self) -> None:
        token = issue_token(self.payload)
        with self.assertRaises(InvalidTokenError):
            verify_token(token[: len(token) // 2])
        with self.assertRaises(InvalidTokenError):
            verify_token("")

    def test_expired_token_rejected(self) -> None:
        token = issue_token(self.payload, expires_in=timedelta(seconds=-1))
        with self.assertRaises(InvalidTokenError):
            verify_token(token)

    def test_zero_lifetime_token_rejected(self) -> None:
        token = issue_token(self.payload, expires_in=timedelta(0))
        with self.assertRaises(InvalidTokenError):
            verify_token(token)

    def test_wrong_secret_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"id": 1, "email": "a@x.com", "role": "user", "iat": now, "exp": now + timedelta(hours=1)},
            "some-other-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            verify_token(token)

    def _sign(self, claims: dict) -> str:
        return jwt.encode(claims, get_signing_secret(), algorithm="HS256")

    def test_malformed_payload_rejected(self) -> None:
        now = datetime.now(UTC)
        later = now + timedelta(hours=1)
        bad_claims = [
            {"id": "1", "email": "a@x.com", "role": "user", "iat": now, "exp": later},
            {"id": 1, "email": "a@x.com", "iat": now, "exp": later},
            {"id": 1, "email": "a@x.com", "role": "superuser", "iat": now, "exp": later},
            {"id": 1, "email": "a@x.com", "role": "user", "iat": now},
            {"id": 1, "email": "a@x.com", "role": "user", "exp": later},
        ]
        for claims in bad_claims:
            with self.subTest(claims=claims):
                with self.assertRaises(InvalidTokenError):
                    verify_token(self._sign(claims))

    def test_invalid_token_error_is_unauthorized(self) -> None:
        with self.assertRaises(InvalidTokenError) as ctx:
            verify_token("garbage")
        self.assertEqual(ctx.exception.kind.value, "unauthorized")
        self.assertIsNotNone(ctx.exception.cause)


class TestSigningSecret(unittest.TestCase):
    """get_signing_secret: configured secret wins; fallback only outside prod."""

    def test_configured_secret(self) -> None:
        self.assertEqual(
            get_signing_secret(get_settings()),
            get_settings().JWT_SECRET.get_secret_value(),
        )

    def test_dev_fallback_when_unset(self) -> None:
        settings = MagicMock()
        settings.JWT_SECRET = None
        settings.is_production = False
        settings.APP_ENV = "dev"
        self.assertEqual(get_signing_secret(settings), DEV_FALLBACK_SECRET)

    def test_prod_without_secret_refuses(self) -> None:
        settings = MagicMock()
        settings.JWT_SECRET = None
        settings.is_production = True
        with self.assertRaises(RuntimeError):
            get_signing_secret(settings)

    def test_tokens_bound_to_secret(self) -> None:
        settings_a = MagicMock()
        settings_a.JWT_SECRET = SecretStr("secret-a-0123456789abcdef0123456789")
        settings_a.JWT_ALGORITHM = "HS256"
        settings_a.JWT_EXPIRE_MINUTES = 60
        settings_b = MagicMock()
        settings_b.JWT_SECRET = SecretStr("secret-b-0123456789abcdef0123456789")
        settings_b.JWT_ALGORITHM = "HS256"
        payload = TokenPayload(id=1, email="a@x.com", role="user")
        token = issue_token(payload, settings_a)
        self.assertEqual(verify_token(token, settings_a), payload)
        with self.assertRaises(InvalidTokenError):
            verify_token(token, settings_b)


if __name__ == "__main__":
    unittest.main()
