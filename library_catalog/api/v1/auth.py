"""JWT login and auth dependencies (get_current_user, get_login_session, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from library_catalog.api.deps import get_verifier
from library_catalog.core.security import create_access_token, decode_access_token, is_encodable
from library_catalog.schemas.auth import (
    ChangePasswordRequest,
    CreateUserRequest,
    CurrentUser,
    LoginRequest,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from library_catalog.services.credentials import CreateOutcome, CredentialVerifier, LoginSession
from library_catalog.services.errors import CatalogError

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token carrying the role.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    session = LoginSession()
    role = verifier.authenticate(session, body.username, body.password)
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )
    token = create_access_token(sub=session.username, role=role.value)
    return TokenResponse(access_token=token, token_type="bearer", role=role)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    username = payload.get("sub")
    if not username:
        raise _unauthorized("Invalid token payload")
    try:
        credential = verifier.store.get(username)
    except CatalogError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    if credential is None:
        raise _unauthorized("User not found")
    return CurrentUser(username=credential.username, role=credential.role)


def get_login_session(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> LoginSession:
    """Dependency: the caller's LoginSession, threaded into catalogue operations."""
    return LoginSession(role=current_user.role, username=current_user.username)


def require_admin(
    session: Annotated[LoginSession, Depends(get_login_session)],
) -> LoginSession:
    """Dependency: require an authenticated ADMIN session. Raises 403 otherwise."""
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return session


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    session: Annotated[LoginSession, Depends(get_login_session)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> Response:
    """Clear the session server-side; the client must also discard its token."""
    verifier.logout(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=CurrentUser)
def me(current_user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    return current_user


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> Response:
    """Rotate the caller's password (required after the first-run admin login)."""
    if not verifier.change_password(current_user.username, body.current_password, body.new_password):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Current password is wrong or the new password is invalid.",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[LoginSession, Depends(require_admin)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> UsersListResponse:
    """List all users (admin only)."""
    try:
        credentials = verifier.list_credentials()
    except CatalogError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    return UsersListResponse(
        users=[UserListItem(username=c.username, role=c.role) for c in credentials]
    )


@router.post("/users", response_model=UserListItem, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    _admin: Annotated[LoginSession, Depends(require_admin)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> UserListItem:
    """Provision a credential (admin only). 409 if the username is taken."""
    if not is_encodable(body.username) or not is_encodable(body.password):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Username and password must be valid UTF-8 text.",
        )
    outcome = verifier.create_credential(body.username, body.password, body.role)
    if outcome is CreateOutcome.CONFLICT:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists.")
    if outcome is CreateOutcome.FAILURE:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Could not create user."
        )
    return UserListItem(username=body.username.strip(), role=body.role)
