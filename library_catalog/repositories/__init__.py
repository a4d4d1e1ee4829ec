"""Book, category and credential stores: SQLAlchemy for production, in-memory for tests."""

from library_catalog.repositories.base import BookStore, CategoryStore, CredentialStore
from library_catalog.repositories.memory import (
    InMemoryBookStore,
    InMemoryCategoryStore,
    InMemoryCredentialStore,
)
from library_catalog.repositories.sql import SqlBookStore, SqlCategoryStore, SqlCredentialStore

__all__ = [
    "BookStore",
    "CategoryStore",
    "CredentialStore",
    "InMemoryBookStore",
    "InMemoryCategoryStore",
    "InMemoryCredentialStore",
    "SqlBookStore",
    "SqlCategoryStore",
    "SqlCredentialStore",
]
