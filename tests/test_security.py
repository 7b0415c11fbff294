"""Unit tests for schoolhub.core.security: bcrypt hashing and the JWT token service."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from schoolhub.core.config import settings
from schoolhub.core.exceptions import InvalidTokenError
from schoolhub.core.security import (
    hash_password,
    issue_access_token,
    verify_access_token,
    verify_password,
)


def _encode(payload: dict, secret: str | None = None) -> str:
    """Sign an arbitrary payload, by default with the configured secret."""
    return jwt.encode(
        payload,
        secret or settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("pw123456")
        self.assertNotEqual(hashed, "pw123456")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("pw123456", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("pw123456")
        self.assertFalse(verify_password("pw1234567", hashed))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("same-password"), hash_password("same-password"))

    def test_garbage_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("pw123456", "not-a-bcrypt-hash"))


class TestTokenIssueVerify(unittest.TestCase):
    """issue_access_token / verify_access_token."""

    def test_round_trip_yields_user_id(self) -> None:
        token = issue_access_token(42)
        claims = verify_access_token(token)
        self.assertEqual(claims.user_id, 42)

    def test_default_lifetime_is_thirty_days(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        claims = verify_access_token(issue_access_token(1, now=now))
        self.assertEqual(claims.expires_at, now + timedelta(days=30))

    def test_payload_carries_only_sub_and_exp(self) -> None:
        token = issue_access_token(5)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(set(payload), {"sub", "exp"})
        self.assertEqual(payload["sub"], "5")

    def test_deterministic_for_fixed_issuance(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        self.assertEqual(issue_access_token(9, now=now), issue_access_token(9, now=now))

    def test_expired_token_rejected(self) -> None:
        token = issue_access_token(1, expires_delta=timedelta(seconds=-5))
        with self.assertRaises(InvalidTokenError) as ctx:
            verify_access_token(token)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Token is not valid.")

    def test_wrong_signature_rejected(self) -> None:
        token = _encode(
            {"sub": "1", "exp": datetime.now(UTC) + timedelta(days=1)},
            secret="some-other-secret",
        )
        with self.assertRaises(InvalidTokenError):
            verify_access_token(token)

    def test_subject_outside_id_range_rejected(self) -> None:
        for user_id in (0, -1, 2**31, 10**25):
            with self.subTest(user_id=user_id):
                with self.assertRaises(InvalidTokenError):
                    verify_access_token(issue_access_token(user_id))

    def test_largest_id_accepted(self) -> None:
        claims = verify_access_token(issue_access_token(2**31 - 1))
        self.assertEqual(claims.user_id, 2**31 - 1)

    def test_malformed_token_rejected(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError):
                    verify_access_token(token)

    def test_non_integer_sub_rejected(self) -> None:
        token = _encode({"sub": "alice", "exp": datetime.now(UTC) + timedelta(days=1)})
        with self.assertRaises(InvalidTokenError):
            verify_access_token(token)

    def test_missing_exp_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            verify_access_token(_encode({"sub": "1"}))

    def test_failures_share_one_message(self) -> None:
        messages = set()
        for token in (
            "abc",
            issue_access_token(1, expires_delta=timedelta(seconds=-5)),
            _encode({"sub": "1", "exp": datetime.now(UTC) + timedelta(days=1)}, "x" * 32),
        ):
            try:
                verify_access_token(token)
            except InvalidTokenError as e:
                messages.add(e.message)
        self.assertEqual(messages, {"Token is not valid."})


if __name__ == "__main__":
    unittest.main()
