"""Tests for first-run setup and the create_user command."""

import unittest
from contextlib import contextmanager
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from library_catalog.bootstrap import initialize
from library_catalog.models import Base
from library_catalog.repositories.sql import SqlCredentialStore
from library_catalog.schemas.auth import Role
from library_catalog.scripts import create_user


class ScriptTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self.factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def stored(self, username: str):
        db = self.factory()
        try:
            return SqlCredentialStore(db).get(username)
        finally:
            db.close()


class TestInitialize(ScriptTestCase):
    def test_first_run_creates_admin_once(self) -> None:
        self.assertEqual(initialize(bind=self.engine, factory=self.factory), "adminpassword")
        self.assertIs(self.stored("admin").role, Role.ADMIN)
        self.assertIsNone(initialize(bind=self.engine, factory=self.factory))


class TestCreateUser(ScriptTestCase):
    def setUp(self) -> None:
        super().setUp()
        Base.metadata.create_all(bind=self.engine)

        @contextmanager
        def scope():
            db = self.factory()
            try:
                yield db
            finally:
                db.close()

        patcher = patch.object(create_user, "session_scope", scope)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_creates_user_with_role(self) -> None:
        self.assertEqual(create_user.main(["librarian", "s3cret", "admin"]), 0)
        self.assertIs(self.stored("librarian").role, Role.ADMIN)

    def test_default_role_is_user(self) -> None:
        self.assertEqual(create_user.main(["reader", "books"]), 0)
        self.assertIs(self.stored("reader").role, Role.USER)

    def test_existing_user_exits_nonzero(self) -> None:
        create_user.main(["reader", "books"])
        self.assertEqual(create_user.main(["reader", "other"]), 1)


if __name__ == "__main__":
    unittest.main()
