"""Catalogue error types and the result value every public operation returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Reason codes carried by a failed OperationResult.
VALIDATION = "validation"
NOT_FOUND = "not_found"
CONFLICT = "conflict"
PERMISSION = "permission"
STORAGE = "storage"


class CatalogError(Exception):
    """Base class for catalogue failures; code is one of the reason codes above."""

    code = STORAGE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(CatalogError):
    """Input failed a format or range rule; nothing was written."""

    code = VALIDATION


class NotFoundError(CatalogError):
    """A record the operation needs does not exist."""

    code = NOT_FOUND


class ConflictError(CatalogError):
    """A uniqueness or reference rule would be violated."""

    code = CONFLICT


class PermissionDenied(CatalogError):
    """The session's role may not perform this operation."""

    code = PERMISSION


class StorageError(CatalogError):
    """The store failed for a reason other than a constraint violation."""

    code = STORAGE


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Success with a value, or failure with a reason code and message."""

    ok: bool
    value: T | None = None
    error: str | None = None
    message: str = ""

    @classmethod
    def success(cls, value: T | None = None, message: str = "") -> OperationResult[T]:
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, err: CatalogError) -> OperationResult[T]:
        return cls(ok=False, error=err.code, message=err.message)
