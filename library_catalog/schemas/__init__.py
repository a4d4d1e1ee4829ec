"""Pydantic request/response schemas."""

from library_catalog.schemas.auth import (
    ChangePasswordRequest,
    CreateUserRequest,
    CredentialRecord,
    CurrentUser,
    LoginRequest,
    Role,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from library_catalog.schemas.catalog import (
    BookListResponse,
    BookRecord,
    BookUpdate,
    CategoryListResponse,
    CategoryRecord,
    CategoryWrite,
)
from library_catalog.schemas.health import HealthResponse

__all__ = [
    "BookListResponse",
    "BookRecord",
    "BookUpdate",
    "CategoryListResponse",
    "CategoryRecord",
    "CategoryWrite",
    "ChangePasswordRequest",
    "CreateUserRequest",
    "CredentialRecord",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "Role",
    "TokenResponse",
    "UserListItem",
    "UsersListResponse",
]
