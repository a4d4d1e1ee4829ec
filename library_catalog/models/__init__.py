"""SQLAlchemy ORM models."""

from library_catalog.models.base import Base
from library_catalog.models.book import Book
from library_catalog.models.category import Category
from library_catalog.models.user import User

__all__ = ["Base", "Book", "Category", "User"]
