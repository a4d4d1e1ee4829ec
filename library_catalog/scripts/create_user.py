"""
Provision a login. Run from project root:
  python -m library_catalog.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m library_catalog.scripts.create_user librarian s3cret ADMIN
"""
import argparse
import logging
import sys

from library_catalog.core.database import session_scope
from library_catalog.repositories.sql import SqlCredentialStore
from library_catalog.schemas.auth import Role
from library_catalog.services.credentials import CreateOutcome, CredentialVerifier


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a library catalogue user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        type=str.upper,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s %(message)s")

    with session_scope() as db:
        outcome = CredentialVerifier(SqlCredentialStore(db)).create_credential(
            args.username, args.password, Role(args.role)
        )
    if outcome is CreateOutcome.CONFLICT:
        print(f"User '{args.username.strip()}' already exists.", file=sys.stderr)
        return 1
    if outcome is CreateOutcome.FAILURE:
        print("Could not create user (check username/password length and the database).", file=sys.stderr)
        return 1
    print(f"Created user '{args.username.strip()}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
