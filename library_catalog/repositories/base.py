"""Capability interfaces for the book, category and credential stores."""

from typing import Protocol

from library_catalog.schemas.auth import CredentialRecord
from library_catalog.schemas.catalog import BookRecord, CategoryRecord
from library_catalog.services.query_composer import QuerySpec


class BookStore(Protocol):
    """
    Book persistence. Lookups return None when absent. Writes raise
    ConflictError on a uniqueness violation and StorageError otherwise.
    """

    def list_all(self) -> list[BookRecord]: ...

    def get_by_id(self, book_id: str) -> BookRecord | None: ...

    def get_by_category(self, category_id: int) -> list[BookRecord]: ...

    def search_by_title(self, substring: str) -> list[BookRecord]: ...

    def search(self, spec: QuerySpec) -> list[BookRecord]: ...

    def insert(self, book: BookRecord) -> BookRecord: ...

    def update(self, book: BookRecord) -> BookRecord | None: ...

    def delete(self, book_id: str) -> bool: ...


class CategoryStore(Protocol):
    """Category persistence; insert assigns the id."""

    def list_all(self) -> list[CategoryRecord]: ...

    def get_by_id(self, category_id: int) -> CategoryRecord | None: ...

    def get_by_name(self, name: str) -> CategoryRecord | None: ...

    def insert(self, category: CategoryRecord) -> CategoryRecord: ...

    def update(self, category: CategoryRecord) -> CategoryRecord | None: ...

    def delete(self, category_id: int) -> bool: ...


class CredentialStore(Protocol):
    """Credential persistence keyed by username."""

    def get(self, username: str) -> CredentialRecord | None: ...

    def insert(self, credential: CredentialRecord) -> CredentialRecord: ...

    def update_password(self, username: str, password_hash: str) -> bool: ...

    def list_all(self) -> list[CredentialRecord]: ...
