"""Unit tests for library_catalog.core.security: password hashing, verification and JWT helpers."""

import unittest
from unittest.mock import patch

import jwt

from library_catalog.core.security import (
    HashingUnavailable,
    create_access_token,
    decode_access_token,
    hash_password,
    is_encodable,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    """hash_password is SHA-256, base64 encoded, and deterministic."""

    def test_known_digest(self) -> None:
        self.assertEqual(
            hash_password("password"),
            "XohImNooBHFR0OVvjcYpJ3NgPQ1qq73WKhHvch0VQtg=",
        )

    def test_same_input_same_hash(self) -> None:
        for pw in ("", "adminpassword", "pässwörd", "x" * 128):
            self.assertEqual(hash_password(pw), hash_password(pw))

    def test_different_inputs_differ(self) -> None:
        hashes = {hash_password(pw) for pw in ("a", "b", "A", "a ", "adminpassword")}
        self.assertEqual(len(hashes), 5)

    def test_hash_is_not_plaintext(self) -> None:
        self.assertNotIn("secret", hash_password("secret"))

    def test_missing_digest_raises_hashing_unavailable(self) -> None:
        with patch("library_catalog.core.security.hashlib.new", side_effect=ValueError("unsupported")):
            with self.assertRaises(HashingUnavailable):
                hash_password("anything")


class TestVerifyPassword(unittest.TestCase):
    """verify_password accepts only the matching password."""

    def test_matching_password(self) -> None:
        for pw in ("", "adminpassword", "Dune Messiah"):
            self.assertTrue(verify_password(pw, hash_password(pw)))

    def test_other_password(self) -> None:
        self.assertFalse(verify_password("adminpassword", hash_password("adminpassword2")))
        self.assertFalse(verify_password("Secret", hash_password("secret")))

    def test_malformed_stored_hash(self) -> None:
        self.assertFalse(verify_password("secret", ""))
        self.assertFalse(verify_password("secret", "not-base64-ü"))

    def test_plaintext_stored_value_does_not_match(self) -> None:
        self.assertFalse(verify_password("secret", "secret"))

    def test_lone_surrogate_does_not_raise(self) -> None:
        self.assertFalse(verify_password("\ud800", hash_password("x")))
        self.assertFalse(verify_password("x", "\udfff"))


class TestIsEncodable(unittest.TestCase):
    def test_text(self) -> None:
        self.assertTrue(is_encodable("pässwörd"))
        self.assertTrue(is_encodable(""))
        self.assertFalse(is_encodable("ab\ud800"))


class TestAccessToken(unittest.TestCase):
    """JWT round trip carries username and role."""

    def test_round_trip(self) -> None:
        token = create_access_token(sub="admin", role="ADMIN")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "admin")
        self.assertEqual(payload["role"], "ADMIN")
        self.assertIn("exp", payload)

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(sub="reader", role="USER")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token[:-2] + ("A" if token[-2] != "A" else "B") + token[-1])


if __name__ == "__main__":
    unittest.main()
