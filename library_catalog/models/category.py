"""ORM model for book categories."""

from sqlalchemy import Column, Integer, String

from library_catalog.models.base import Base


class Category(Base):
    """Category a book is filed under. id is assigned by the database on insert."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
