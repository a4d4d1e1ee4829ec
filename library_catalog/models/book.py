"""ORM model for catalogued books."""

from sqlalchemy import Column, ForeignKey, Integer, String

from library_catalog.models.base import Base


class Book(Base):
    """
    One catalogued book. id is chosen by the librarian and never changes.

    category_id references categories.id; deleting a referenced category is
    refused by the catalogue service before it reaches the database.
    """

    __tablename__ = "books"

    id = Column(String(50), primary_key=True)
    title = Column(String(255), nullable=False, index=True)
    author = Column(String(255), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
