"""Unit tests for library_catalog.services.credentials: login session, provisioning and first-run admin."""

import unittest
from unittest.mock import MagicMock

from library_catalog.core.security import hash_password
from library_catalog.repositories.memory import InMemoryCredentialStore
from library_catalog.schemas.auth import CredentialRecord, Role
from library_catalog.services.credentials import (
    CreateOutcome,
    CredentialVerifier,
    LoginSession,
    ensure_bootstrap_admin,
)
from library_catalog.services.errors import ConflictError, StorageError


def _verifier(**users: tuple[str, Role]) -> CredentialVerifier:
    """Build a verifier over an in-memory store holding username=(password, role)."""
    verifier = CredentialVerifier(InMemoryCredentialStore())
    for username, (password, role) in users.items():
        assert verifier.create_credential(username, password, role) is CreateOutcome.CREATED
    return verifier


class TestAuthenticate(unittest.TestCase):
    """authenticate records the role only on success."""

    def test_correct_password_returns_and_records_role(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        session = LoginSession()
        self.assertIs(verifier.authenticate(session, "admin", "adminpassword"), Role.ADMIN)
        self.assertIs(session.role, Role.ADMIN)
        self.assertEqual(session.username, "admin")
        self.assertTrue(session.is_admin)

    def test_repeated_success_gives_same_role(self) -> None:
        verifier = _verifier(reader=("books", Role.USER))
        session = LoginSession()
        first = verifier.authenticate(session, "reader", "books")
        second = verifier.authenticate(session, "reader", "books")
        self.assertIs(first, Role.USER)
        self.assertIs(second, Role.USER)

    def test_wrong_password_keeps_previous_role(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN), reader=("books", Role.USER))
        session = LoginSession()
        verifier.authenticate(session, "admin", "adminpassword")
        self.assertIsNone(verifier.authenticate(session, "reader", "wrong"))
        self.assertIs(session.role, Role.ADMIN)
        self.assertIs(verifier.authenticate(session, "reader", "books"), Role.USER)
        self.assertIs(session.role, Role.USER)

    def test_unknown_user_is_unauthenticated(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        session = LoginSession()
        self.assertIsNone(verifier.authenticate(session, "ghost", "adminpassword"))
        self.assertFalse(session.is_authenticated)

    def test_storage_error_is_unauthenticated(self) -> None:
        store = MagicMock()
        store.get.side_effect = StorageError("db down")
        session = LoginSession(role=Role.USER, username="reader")
        self.assertIsNone(CredentialVerifier(store).authenticate(session, "reader", "books"))
        self.assertIs(session.role, Role.USER)

    def test_unencodable_password_is_unauthenticated(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        session = LoginSession()
        self.assertIsNone(verifier.authenticate(session, "admin", "\ud800"))
        self.assertIsNone(verifier.authenticate(session, "\ud800", "adminpassword"))
        self.assertFalse(session.is_authenticated)

    def test_username_is_trimmed_like_on_create(self) -> None:
        verifier = _verifier(**{" bob ": ("books", Role.USER)})
        self.assertIs(verifier.authenticate(LoginSession(), " bob", "books"), Role.USER)
        self.assertIs(verifier.authenticate(LoginSession(), "bob", "books"), Role.USER)

    def test_stored_hash_from_legacy_rows_is_accepted(self) -> None:
        store = InMemoryCredentialStore()
        store.insert(
            CredentialRecord(
                username="admin",
                password_hash="XohImNooBHFR0OVvjcYpJ3NgPQ1qq73WKhHvch0VQtg=",
                role=Role.ADMIN,
            )
        )
        self.assertIs(CredentialVerifier(store).authenticate(LoginSession(), "admin", "password"), Role.ADMIN)


class TestLogout(unittest.TestCase):
    """logout clears the session and is idempotent."""

    def test_logout_clears_role(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        session = LoginSession()
        verifier.authenticate(session, "admin", "adminpassword")
        verifier.logout(session)
        self.assertIsNone(session.role)
        self.assertIsNone(session.username)
        verifier.logout(session)
        self.assertFalse(session.is_authenticated)

    def test_sessions_are_independent(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN), reader=("books", Role.USER))
        one, two = LoginSession(), LoginSession()
        verifier.authenticate(one, "admin", "adminpassword")
        verifier.authenticate(two, "reader", "books")
        verifier.logout(one)
        self.assertIsNone(one.role)
        self.assertIs(two.role, Role.USER)


class TestCreateCredential(unittest.TestCase):
    """create_credential reports CREATED, CONFLICT or FAILURE."""

    def test_created_credential_stores_hash_not_plaintext(self) -> None:
        store = InMemoryCredentialStore()
        verifier = CredentialVerifier(store)
        self.assertIs(verifier.create_credential("reader", "books", Role.USER), CreateOutcome.CREATED)
        stored = store.get("reader")
        self.assertEqual(stored.password_hash, hash_password("books"))
        self.assertIs(stored.role, Role.USER)

    def test_duplicate_username_conflicts_and_keeps_existing(self) -> None:
        store = InMemoryCredentialStore()
        verifier = CredentialVerifier(store)
        verifier.create_credential("admin", "adminpassword", Role.ADMIN)
        before = store.get("admin")
        self.assertIs(verifier.create_credential("admin", "other", Role.USER), CreateOutcome.CONFLICT)
        self.assertEqual(store.get("admin"), before)

    def test_constraint_violation_on_insert_is_conflict(self) -> None:
        store = MagicMock()
        store.get.return_value = None
        store.insert.side_effect = ConflictError("duplicate key")
        self.assertIs(
            CredentialVerifier(store).create_credential("admin", "pw", Role.ADMIN),
            CreateOutcome.CONFLICT,
        )

    def test_storage_error_is_failure(self) -> None:
        store = MagicMock()
        store.get.return_value = None
        store.insert.side_effect = StorageError("db down")
        self.assertIs(
            CredentialVerifier(store).create_credential("admin", "pw", Role.ADMIN),
            CreateOutcome.FAILURE,
        )

    def test_invalid_lengths_are_failure(self) -> None:
        verifier = CredentialVerifier(InMemoryCredentialStore())
        self.assertIs(verifier.create_credential("   ", "pw", Role.USER), CreateOutcome.FAILURE)
        self.assertIs(verifier.create_credential("reader", "", Role.USER), CreateOutcome.FAILURE)
        self.assertIs(verifier.create_credential("reader", "x" * 129, Role.USER), CreateOutcome.FAILURE)

    def test_unencodable_input_is_failure(self) -> None:
        store = InMemoryCredentialStore()
        verifier = CredentialVerifier(store)
        self.assertIs(verifier.create_credential("reader", "\ud800", Role.USER), CreateOutcome.FAILURE)
        self.assertIs(verifier.create_credential("re\udc00der", "books", Role.USER), CreateOutcome.FAILURE)
        self.assertEqual(store.list_all(), [])


class TestChangePassword(unittest.TestCase):
    """change_password requires the current password."""

    def test_rotation(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        self.assertTrue(verifier.change_password("admin", "adminpassword", "n3w-secret"))
        self.assertIsNone(verifier.authenticate(LoginSession(), "admin", "adminpassword"))
        self.assertIs(verifier.authenticate(LoginSession(), "admin", "n3w-secret"), Role.ADMIN)

    def test_wrong_current_password(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        self.assertFalse(verifier.change_password("admin", "nope", "n3w-secret"))
        self.assertIs(verifier.authenticate(LoginSession(), "admin", "adminpassword"), Role.ADMIN)

    def test_unencodable_passwords_rejected(self) -> None:
        verifier = _verifier(admin=("adminpassword", Role.ADMIN))
        self.assertFalse(verifier.change_password("admin", "adminpassword", "\ud800"))
        self.assertFalse(verifier.change_password("admin", "\ud800", "n3w-secret"))
        self.assertIs(verifier.authenticate(LoginSession(), "admin", "adminpassword"), Role.ADMIN)

    def test_unknown_user(self) -> None:
        self.assertFalse(_verifier().change_password("ghost", "a", "b"))


class TestBootstrapAdmin(unittest.TestCase):
    """ensure_bootstrap_admin creates the admin account once."""

    def test_creates_admin_on_first_run(self) -> None:
        verifier = CredentialVerifier(InMemoryCredentialStore())
        self.assertEqual(ensure_bootstrap_admin(verifier, "admin", "adminpassword"), "adminpassword")
        self.assertIs(verifier.authenticate(LoginSession(), "admin", "adminpassword"), Role.ADMIN)

    def test_second_run_is_noop(self) -> None:
        verifier = CredentialVerifier(InMemoryCredentialStore())
        ensure_bootstrap_admin(verifier, "admin", "adminpassword")
        verifier.change_password("admin", "adminpassword", "rotated")
        self.assertIsNone(ensure_bootstrap_admin(verifier, "admin", "adminpassword"))
        self.assertIs(verifier.authenticate(LoginSession(), "admin", "rotated"), Role.ADMIN)

    def test_storage_error_returns_none(self) -> None:
        store = MagicMock()
        store.get.side_effect = StorageError("db down")
        self.assertIsNone(ensure_bootstrap_admin(CredentialVerifier(store), "admin", "adminpassword"))
        store.insert.assert_not_called()


if __name__ == "__main__":
    unittest.main()
