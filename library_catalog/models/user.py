"""ORM model for login credentials (auth and RBAC)."""

from sqlalchemy import Column, String

from library_catalog.models.base import Base


class User(Base):
    """
    Credential row: username, password hash and role.

    role: 'ADMIN' or 'USER'
    """

    __tablename__ = "users"

    username = Column(String(255), primary_key=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="USER")
