"""
Book and category workflows behind the management screens.

Each public method validates input, checks the session's role for writes,
calls the stores once per step and returns an OperationResult. Catalogue
errors never escape as exceptions. Writes hand back the stored record so a
caller can update its view without re-listing everything.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from library_catalog.repositories.base import BookStore, CategoryStore
from library_catalog.schemas.catalog import BookRecord, CategoryRecord
from library_catalog.services.credentials import LoginSession
from library_catalog.services.errors import (
    CatalogError,
    ConflictError,
    NotFoundError,
    OperationResult,
    STORAGE,
    PermissionDenied,
    ValidationError,
)
from library_catalog.services.query_composer import (
    SearchCriteria,
    compose_search,
    criteria_from_legacy,
    validate_search_criteria,
)
from library_catalog.services.validation import (
    is_null_or_empty,
    parse_optional_year,
    validate_book,
    validate_category_name,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run(action: str, fn: Callable[[], OperationResult[T] | T]) -> OperationResult[T]:
    try:
        value = fn()
    except CatalogError as e:
        log = logger.error if e.code == STORAGE else logger.info
        log("%s failed (%s): %s", action, e.code, e.message)
        return OperationResult.failure(e)
    if isinstance(value, OperationResult):
        return value
    return OperationResult.success(value)


def _require_admin(session: LoginSession) -> None:
    if not session.is_admin:
        raise PermissionDenied("Administrator access required.")


def _require_login(session: LoginSession) -> None:
    if not session.is_authenticated:
        raise PermissionDenied("Please log in first.")


class CatalogService:
    """Catalogue operations for one store pair; ADMIN may write, USER may only read and search."""

    def __init__(self, books: BookStore, categories: CategoryStore) -> None:
        self.books = books
        self.categories = categories

    # Books: reads

    def list_books(self, session: LoginSession) -> OperationResult[list[BookRecord]]:
        def run() -> list[BookRecord]:
            _require_login(session)
            return self.books.list_all()

        return _run("list books", run)

    def get_book(self, session: LoginSession, book_id: str) -> OperationResult[BookRecord]:
        def run() -> BookRecord:
            _require_login(session)
            book = self.books.get_by_id(book_id)
            if book is None:
                raise NotFoundError(f"Book {book_id!r} not found.")
            return book

        return _run("get book", run)

    def books_in_category(
        self, session: LoginSession, category_id: int
    ) -> OperationResult[list[BookRecord]]:
        def run() -> list[BookRecord]:
            _require_login(session)
            return self.books.get_by_category(category_id)

        return _run("list books in category", run)

    def search_by_title(self, session: LoginSession, title: str) -> OperationResult[list[BookRecord]]:
        def run() -> list[BookRecord]:
            _require_login(session)
            if is_null_or_empty(title):
                raise ValidationError("Please enter a title to search.")
            return self.books.search_by_title(title.strip())

        return _run("search by title", run)

    def advanced_search(
        self, session: LoginSession, criteria: SearchCriteria
    ) -> OperationResult[list[BookRecord]]:
        """Validate the year range first, then run the composed query."""

        def run() -> list[BookRecord]:
            _require_login(session)
            validate_search_criteria(criteria)
            return self.books.search(compose_search(criteria))

        return _run("advanced search", run)

    def search_form(
        self,
        session: LoginSession,
        title: str = "",
        author: str = "",
        category_id: int = 0,
        min_year: str = "",
        max_year: str = "",
    ) -> OperationResult[list[BookRecord]]:
        """
        Advanced search from raw form input: blank text or a category of 0
        means "any", years arrive as typed and must parse as integers.
        """

        def run() -> OperationResult[list[BookRecord]]:
            _require_login(session)
            criteria = criteria_from_legacy(
                title,
                author,
                category_id,
                parse_optional_year(min_year, "Min Year") or 0,
                parse_optional_year(max_year, "Max Year") or 0,
            )
            return self.advanced_search(session, criteria)

        return _run("advanced search", run)

    # Books: writes

    def _check_book(self, book: BookRecord) -> None:
        validate_book(book.id, book.title, book.author, book.year)
        if self.categories.get_by_id(book.category_id) is None:
            raise ValidationError("Selected category not found in database.")

    def add_book(self, session: LoginSession, book: BookRecord) -> OperationResult[BookRecord]:
        def run() -> OperationResult[BookRecord]:
            _require_admin(session)
            clean = book.model_copy(
                update={"id": book.id.strip(), "title": book.title.strip(), "author": book.author.strip()}
            )
            self._check_book(clean)
            if self.books.get_by_id(clean.id) is not None:
                raise ConflictError("Book with this ID already exists.")
            stored = self.books.insert(clean)
            logger.info("Book %r added", stored.id)
            return OperationResult.success(stored, "Book added successfully!")

        return _run("add book", run)

    def update_book(self, session: LoginSession, book: BookRecord) -> OperationResult[BookRecord]:
        def run() -> OperationResult[BookRecord]:
            _require_admin(session)
            if is_null_or_empty(book.id):
                raise ValidationError("Please select a book to update.")
            clean = book.model_copy(update={"title": book.title.strip(), "author": book.author.strip()})
            self._check_book(clean)
            stored = self.books.update(clean)
            if stored is None:
                raise NotFoundError(f"Book {book.id!r} not found.")
            logger.info("Book %r updated", stored.id)
            return OperationResult.success(stored, "Book updated successfully!")

        return _run("update book", run)

    def delete_book(self, session: LoginSession, book_id: str) -> OperationResult[str]:
        def run() -> OperationResult[str]:
            _require_admin(session)
            if is_null_or_empty(book_id):
                raise ValidationError("Please select a book to delete.")
            if not self.books.delete(book_id):
                raise NotFoundError(f"Book {book_id!r} not found.")
            logger.info("Book %r deleted", book_id)
            return OperationResult.success(book_id, "Book deleted successfully!")

        return _run("delete book", run)

    # Categories

    def list_categories(self, session: LoginSession) -> OperationResult[list[CategoryRecord]]:
        def run() -> list[CategoryRecord]:
            _require_login(session)
            return self.categories.list_all()

        return _run("list categories", run)

    def get_category(self, session: LoginSession, category_id: int) -> OperationResult[CategoryRecord]:
        def run() -> CategoryRecord:
            _require_login(session)
            category = self.categories.get_by_id(category_id)
            if category is None:
                raise NotFoundError(f"Category {category_id} not found.")
            return category

        return _run("get category", run)

    def add_category(self, session: LoginSession, name: str) -> OperationResult[CategoryRecord]:
        def run() -> OperationResult[CategoryRecord]:
            _require_admin(session)
            validate_category_name(name)
            clean = name.strip()
            if self.categories.get_by_name(clean) is not None:
                raise ConflictError("Category with this name already exists.")
            stored = self.categories.insert(CategoryRecord(name=clean))
            logger.info("Category %r added with id %s", stored.name, stored.id)
            return OperationResult.success(stored, "Category added successfully!")

        return _run("add category", run)

    def update_category(
        self, session: LoginSession, category_id: int, name: str
    ) -> OperationResult[CategoryRecord]:
        def run() -> OperationResult[CategoryRecord]:
            _require_admin(session)
            validate_category_name(name)
            clean = name.strip()
            existing = self.categories.get_by_name(clean)
            if existing is not None and existing.id != category_id:
                raise ConflictError("Another category with this name already exists.")
            stored = self.categories.update(CategoryRecord(id=category_id, name=clean))
            if stored is None:
                raise NotFoundError(f"Category {category_id} not found.")
            logger.info("Category %s renamed to %r", category_id, stored.name)
            return OperationResult.success(stored, "Category updated successfully!")

        return _run("update category", run)

    def delete_category(self, session: LoginSession, category_id: int) -> OperationResult[int]:
        """Refuse while any book still references the category."""

        def run() -> OperationResult[int]:
            _require_admin(session)
            if self.books.get_by_category(category_id):
                raise ConflictError(
                    "Cannot delete category: Books are associated with it. "
                    "Please reassign or delete books first."
                )
            if not self.categories.delete(category_id):
                raise NotFoundError(f"Category {category_id} not found.")
            logger.info("Category %s deleted", category_id)
            return OperationResult.success(category_id, "Category deleted successfully!")

        return _run("delete category", run)
