"""Shared dependencies: stores bound to the request's DB session, and result-to-HTTP mapping."""

from typing import Annotated, TypeVar

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from library_catalog.core.database import get_db
from library_catalog.repositories.sql import SqlBookStore, SqlCategoryStore, SqlCredentialStore
from library_catalog.services import errors
from library_catalog.services.catalog import CatalogService
from library_catalog.services.credentials import CredentialVerifier

T = TypeVar("T")

ERROR_STATUS = {
    errors.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.CONFLICT: status.HTTP_409_CONFLICT,
    errors.PERMISSION: status.HTTP_403_FORBIDDEN,
    errors.STORAGE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_verifier(db: Annotated[Session, Depends(get_db)]) -> CredentialVerifier:
    return CredentialVerifier(SqlCredentialStore(db))


def get_catalog(db: Annotated[Session, Depends(get_db)]) -> CatalogService:
    return CatalogService(SqlBookStore(db), SqlCategoryStore(db))


def unwrap(result: errors.OperationResult[T]) -> T:
    """Return the result's value or raise the HTTPException matching its error code."""
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=result.message,
    )
