"""
First-run setup: create missing tables and the default admin account.

  python -m library_catalog.bootstrap

Runs automatically when the API starts unless BOOTSTRAP_ON_STARTUP=false.
Prefer `alembic upgrade head` for managed databases; create_all only adds
tables that do not exist yet.
"""

import logging
import sys

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from library_catalog.core.config import get_settings
from library_catalog.core.database import SessionLocal, engine, session_scope
from library_catalog.models import Base
from library_catalog.repositories.sql import SqlCredentialStore
from library_catalog.services.credentials import CredentialVerifier, ensure_bootstrap_admin

logger = logging.getLogger(__name__)


def initialize(bind: Engine = engine, factory: sessionmaker = SessionLocal) -> str | None:
    """
    Create tables and seed the admin user. Returns the admin password if the
    account was created on this run (show it to the operator once), else None.
    """
    settings = get_settings()
    Base.metadata.create_all(bind=bind)
    with session_scope(factory) as db:
        verifier = CredentialVerifier(SqlCredentialStore(db))
        password = ensure_bootstrap_admin(
            verifier,
            settings.BOOTSTRAP_ADMIN_USERNAME,
            settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
        )
    if password is not None:
        logger.warning(
            "Initial ADMIN user created: username=%s password=%s. "
            "Change this password after first login (POST /auth/password).",
            settings.BOOTSTRAP_ADMIN_USERNAME,
            password,
        )
    return password


def main() -> int:
    """Run first-run setup against DATABASE_URL."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    try:
        initialize()
        logger.info("Bootstrap completed")
        return 0
    except SQLAlchemyError as e:
        logger.exception("Bootstrap failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
