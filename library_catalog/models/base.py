"""SQLAlchemy declarative Base shared by the catalogue tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for users, categories and books."""
