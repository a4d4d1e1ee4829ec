"""
Credential verification and the login session.

The authenticated role lives in an explicit LoginSession that callers pass
around, never in module state. Storage failures are logged and turned into
a failed outcome; nothing here is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from library_catalog.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
    is_encodable,
    verify_password,
)
from library_catalog.repositories.base import CredentialStore
from library_catalog.schemas.auth import CredentialRecord, Role
from library_catalog.services.errors import CatalogError, ConflictError

logger = logging.getLogger(__name__)


class CreateOutcome(str, Enum):
    CREATED = "created"
    CONFLICT = "conflict"
    FAILURE = "failure"


@dataclass
class LoginSession:
    """Role of whoever is logged in on this session, or None."""

    role: Role | None = None
    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.role is not None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def normalize_username(username: str) -> str:
    """Usernames are stored and looked up without surrounding whitespace."""
    return username.strip()


def _valid_username(username: str) -> bool:
    return USERNAME_MIN_LEN <= len(username.strip()) <= USERNAME_MAX_LEN and is_encodable(username)


def _valid_password(password: str) -> bool:
    return PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN and is_encodable(password)


class CredentialVerifier:
    """Authenticates against a CredentialStore and provisions new credentials."""

    def __init__(self, store: CredentialStore) -> None:
        self.store = store

    @staticmethod
    def hash(password: str) -> str:
        return hash_password(password)

    @staticmethod
    def verify(plaintext: str, stored_hash: str) -> bool:
        return verify_password(plaintext, stored_hash)

    def authenticate(self, session: LoginSession, username: str, password: str) -> Role | None:
        """
        Return the user's role and record it on session, or None.
        A failed attempt leaves session unchanged and does not say which check failed.
        """
        username = normalize_username(username)
        if not _valid_username(username):
            logger.info("Authentication failed: malformed username")
            return None
        try:
            credential = self.store.get(username)
        except CatalogError as e:
            logger.error("Authentication lookup failed for %r: %s", username, e.message)
            return None
        if credential is None or not self.verify(password, credential.password_hash):
            logger.info("Authentication failed for %r", username)
            return None
        session.role = credential.role
        session.username = credential.username
        logger.info("User %r logged in as %s", credential.username, credential.role.value)
        return credential.role

    def create_credential(self, username: str, password: str, role: Role) -> CreateOutcome:
        """Hash password and insert a new credential. An existing username is left untouched."""
        username = normalize_username(username)
        if not _valid_username(username) or not _valid_password(password):
            logger.warning("Refusing to create user %r: invalid username or password", username)
            return CreateOutcome.FAILURE
        try:
            if self.store.get(username) is not None:
                logger.warning("User %r already exists", username)
                return CreateOutcome.CONFLICT
            self.store.insert(
                CredentialRecord(username=username, password_hash=self.hash(password), role=role)
            )
        except ConflictError:
            logger.warning("User %r already exists", username)
            return CreateOutcome.CONFLICT
        except CatalogError as e:
            logger.error("Error creating user %r: %s", username, e.message)
            return CreateOutcome.FAILURE
        logger.info("Created user %r with role %s", username, role.value)
        return CreateOutcome.CREATED

    def change_password(self, username: str, current_password: str, new_password: str) -> bool:
        """Replace the stored hash when current_password checks out."""
        if not _valid_password(new_password):
            return False
        try:
            credential = self.store.get(username)
            if credential is None or not self.verify(current_password, credential.password_hash):
                return False
            changed = self.store.update_password(username, self.hash(new_password))
        except CatalogError as e:
            logger.error("Error changing password for %r: %s", username, e.message)
            return False
        if changed:
            logger.info("Password changed for %r", username)
        return changed

    def list_credentials(self) -> list[CredentialRecord]:
        return self.store.list_all()

    def logout(self, session: LoginSession) -> None:
        if session.username is not None:
            logger.info("User %r logged out", session.username)
        session.role = None
        session.username = None


def ensure_bootstrap_admin(verifier: CredentialVerifier, username: str, password: str) -> str | None:
    """
    Create the first-run admin account when no credential named username exists.

    Returns the default password when the account was just created, so the
    caller can show it once; None when it already existed or creation failed.
    """
    try:
        exists = verifier.store.get(username) is not None
    except CatalogError as e:
        logger.error("Could not check for admin user %r: %s", username, e.message)
        return None
    if exists:
        logger.info("Admin user %r already exists; skipping initial admin creation.", username)
        return None
    outcome = verifier.create_credential(username, password, Role.ADMIN)
    if outcome is not CreateOutcome.CREATED:
        logger.error("Failed to create default admin user %r (%s)", username, outcome.value)
        return None
    logger.warning(
        "Default admin user %r created with the configured bootstrap password; "
        "change it after first login.",
        username,
    )
    return password
