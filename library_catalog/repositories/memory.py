"""Dict-backed stores with the same contract as the SQL ones; used by tests and demos."""

from library_catalog.schemas.auth import CredentialRecord
from library_catalog.schemas.catalog import BookRecord, CategoryRecord
from library_catalog.services.errors import ConflictError
from library_catalog.services.query_composer import QuerySpec, SearchCriteria, compose_search


class InMemoryBookStore:
    """BookStore keeping copies of records keyed by id."""

    def __init__(self, books: list[BookRecord] | None = None) -> None:
        self._books: dict[str, BookRecord] = {}
        for book in books or []:
            self.insert(book)

    def _sorted(self, rows) -> list[BookRecord]:
        return [b.model_copy() for b in sorted(rows, key=lambda b: b.id)]

    def list_all(self) -> list[BookRecord]:
        return self._sorted(self._books.values())

    def get_by_id(self, book_id: str) -> BookRecord | None:
        book = self._books.get(book_id)
        return book.model_copy() if book is not None else None

    def get_by_category(self, category_id: int) -> list[BookRecord]:
        return self._sorted(b for b in self._books.values() if b.category_id == category_id)

    def search_by_title(self, substring: str) -> list[BookRecord]:
        return self.search(compose_search(SearchCriteria(title=substring)))

    def search(self, spec: QuerySpec) -> list[BookRecord]:
        return self._sorted(b for b in self._books.values() if spec.matches(b))

    def insert(self, book: BookRecord) -> BookRecord:
        if book.id in self._books:
            raise ConflictError(f"Book {book.id!r} already exists.")
        self._books[book.id] = book.model_copy()
        return book.model_copy()

    def update(self, book: BookRecord) -> BookRecord | None:
        if book.id not in self._books:
            return None
        self._books[book.id] = book.model_copy()
        return book.model_copy()

    def delete(self, book_id: str) -> bool:
        return self._books.pop(book_id, None) is not None


class InMemoryCategoryStore:
    """CategoryStore assigning ids from 1 upwards, enforcing unique names like the table does."""

    def __init__(self, names: list[str] | None = None) -> None:
        self._categories: dict[int, CategoryRecord] = {}
        self._next_id = 1
        for name in names or []:
            self.insert(CategoryRecord(name=name))

    def list_all(self) -> list[CategoryRecord]:
        return [c.model_copy() for c in sorted(self._categories.values(), key=lambda c: c.name)]

    def get_by_id(self, category_id: int) -> CategoryRecord | None:
        category = self._categories.get(category_id)
        return category.model_copy() if category is not None else None

    def get_by_name(self, name: str) -> CategoryRecord | None:
        for category in self._categories.values():
            if category.name == name:
                return category.model_copy()
        return None

    def insert(self, category: CategoryRecord) -> CategoryRecord:
        if self.get_by_name(category.name) is not None:
            raise ConflictError(f"Category {category.name!r} already exists.")
        stored = CategoryRecord(id=self._next_id, name=category.name)
        self._categories[stored.id] = stored
        self._next_id += 1
        return stored.model_copy()

    def update(self, category: CategoryRecord) -> CategoryRecord | None:
        if category.id not in self._categories:
            return None
        other = self.get_by_name(category.name)
        if other is not None and other.id != category.id:
            raise ConflictError(f"Category {category.name!r} already exists.")
        self._categories[category.id] = category.model_copy()
        return category.model_copy()

    def delete(self, category_id: int) -> bool:
        return self._categories.pop(category_id, None) is not None


class InMemoryCredentialStore:
    """CredentialStore keyed by username."""

    def __init__(self) -> None:
        self._credentials: dict[str, CredentialRecord] = {}

    def get(self, username: str) -> CredentialRecord | None:
        credential = self._credentials.get(username)
        return credential.model_copy() if credential is not None else None

    def insert(self, credential: CredentialRecord) -> CredentialRecord:
        if credential.username in self._credentials:
            raise ConflictError(f"User {credential.username!r} already exists.")
        self._credentials[credential.username] = credential.model_copy()
        return credential.model_copy()

    def update_password(self, username: str, password_hash: str) -> bool:
        credential = self._credentials.get(username)
        if credential is None:
            return False
        self._credentials[username] = credential.model_copy(update={"password_hash": password_hash})
        return True

    def list_all(self) -> list[CredentialRecord]:
        return [self._credentials[u].model_copy() for u in sorted(self._credentials)]
