"""SQLAlchemy-backed stores: one statement per call, committed immediately."""

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from library_catalog.models import Book, Category, User
from library_catalog.schemas.auth import CredentialRecord
from library_catalog.schemas.catalog import BookRecord, CategoryRecord
from library_catalog.services.errors import ConflictError, StorageError
from library_catalog.services.query_composer import QuerySpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _read(db: Session, what: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database error while %s: %s", what, e)
        raise StorageError(f"Database error while {what}.") from e


def _write(db: Session, what: str, fn: Callable[[], T]) -> T:
    """Run fn and commit; map constraint violations to ConflictError."""
    try:
        result = fn()
        db.commit()
        return result
    except IntegrityError as e:
        db.rollback()
        logger.warning("Constraint violation while %s: %s", what, e.orig)
        raise ConflictError(f"Constraint violation while {what}.") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database error while %s: %s", what, e)
        raise StorageError(f"Database error while {what}.") from e


def _books(rows: list[Book]) -> list[BookRecord]:
    return [BookRecord.model_validate(r) for r in rows]


class SqlBookStore:
    """BookStore over the books table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[BookRecord]:
        return _read(
            self.db,
            "listing books",
            lambda: _books(self.db.query(Book).order_by(Book.id).all()),
        )

    def get_by_id(self, book_id: str) -> BookRecord | None:
        row = _read(self.db, "loading book", lambda: self.db.get(Book, book_id))
        return BookRecord.model_validate(row) if row is not None else None

    def get_by_category(self, category_id: int) -> list[BookRecord]:
        return _read(
            self.db,
            "listing books by category",
            lambda: _books(
                self.db.query(Book)
                .filter(Book.category_id == category_id)
                .order_by(Book.id)
                .all()
            ),
        )

    def search_by_title(self, substring: str) -> list[BookRecord]:
        return _read(
            self.db,
            "searching books by title",
            lambda: _books(
                self.db.query(Book)
                .filter(Book.title.icontains(substring, autoescape=True))
                .order_by(Book.id)
                .all()
            ),
        )

    def search(self, spec: QuerySpec) -> list[BookRecord]:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Book search: %s %s", *spec.to_sql())
        return _read(
            self.db,
            "searching books",
            lambda: _books(
                self.db.query(Book)
                .filter(*spec.where_clauses(Book))
                .order_by(Book.id)
                .all()
            ),
        )

    def insert(self, book: BookRecord) -> BookRecord:
        def add() -> BookRecord:
            self.db.add(Book(**book.model_dump()))
            self.db.flush()
            return book

        return _write(self.db, f"adding book {book.id!r}", add)

    def update(self, book: BookRecord) -> BookRecord | None:
        def change() -> BookRecord | None:
            row = self.db.get(Book, book.id)
            if row is None:
                return None
            row.title = book.title
            row.author = book.author
            row.category_id = book.category_id
            row.year = book.year
            self.db.flush()
            return BookRecord.model_validate(row)

        return _write(self.db, f"updating book {book.id!r}", change)

    def delete(self, book_id: str) -> bool:
        def remove() -> bool:
            row = self.db.get(Book, book_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.flush()
            return True

        return _write(self.db, f"deleting book {book_id!r}", remove)


class SqlCategoryStore:
    """CategoryStore over the categories table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[CategoryRecord]:
        rows = _read(
            self.db,
            "listing categories",
            lambda: self.db.query(Category).order_by(Category.name).all(),
        )
        return [CategoryRecord.model_validate(r) for r in rows]

    def get_by_id(self, category_id: int) -> CategoryRecord | None:
        row = _read(self.db, "loading category", lambda: self.db.get(Category, category_id))
        return CategoryRecord.model_validate(row) if row is not None else None

    def get_by_name(self, name: str) -> CategoryRecord | None:
        row = _read(
            self.db,
            "loading category by name",
            lambda: self.db.query(Category).filter(Category.name == name).first(),
        )
        return CategoryRecord.model_validate(row) if row is not None else None

    def insert(self, category: CategoryRecord) -> CategoryRecord:
        def add() -> Category:
            row = Category(name=category.name)
            self.db.add(row)
            self.db.flush()
            return row

        row = _write(self.db, f"adding category {category.name!r}", add)
        return CategoryRecord(id=row.id, name=row.name)

    def update(self, category: CategoryRecord) -> CategoryRecord | None:
        def rename() -> CategoryRecord | None:
            row = self.db.get(Category, category.id)
            if row is None:
                return None
            row.name = category.name
            self.db.flush()
            return CategoryRecord(id=row.id, name=row.name)

        return _write(self.db, f"updating category {category.id}", rename)

    def delete(self, category_id: int) -> bool:
        def remove() -> bool:
            row = self.db.get(Category, category_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.flush()
            return True

        return _write(self.db, f"deleting category {category_id}", remove)


class SqlCredentialStore:
    """CredentialStore over the users table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, username: str) -> CredentialRecord | None:
        row = _read(self.db, "loading credential", lambda: self.db.get(User, username))
        return CredentialRecord.model_validate(row) if row is not None else None

    def insert(self, credential: CredentialRecord) -> CredentialRecord:
        def add() -> CredentialRecord:
            self.db.add(
                User(
                    username=credential.username,
                    password_hash=credential.password_hash,
                    role=credential.role.value,
                )
            )
            self.db.flush()
            return credential

        return _write(self.db, f"creating user {credential.username!r}", add)

    def update_password(self, username: str, password_hash: str) -> bool:
        def change() -> bool:
            row = self.db.get(User, username)
            if row is None:
                return False
            row.password_hash = password_hash
            return True

        return _write(self.db, f"changing password for {username!r}", change)

    def list_all(self) -> list[CredentialRecord]:
        rows = _read(
            self.db,
            "listing users",
            lambda: self.db.query(User).order_by(User.username).all(),
        )
        return [CredentialRecord.model_validate(r) for r in rows]
