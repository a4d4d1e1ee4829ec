"""Request/response schemas for auth endpoints, plus the role and credential records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """ADMIN manages books and categories; USER can only list and search."""

    ADMIN = "ADMIN"
    USER = "USER"


class CredentialRecord(BaseModel):
    """Stored credential as returned by a credential store."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    password_hash: str
    role: Role


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    role: Role = Field(..., description="Role granted by this login")


class CurrentUser(BaseModel):
    """Authenticated user (username, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    role: Role


class CreateUserRequest(BaseModel):
    """New credential to provision (admin only)."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    role: Role = Role.USER


class ChangePasswordRequest(BaseModel):
    """Password rotation for the logged-in user."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=1, max_length=128)


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    role: Role


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserListItem]
