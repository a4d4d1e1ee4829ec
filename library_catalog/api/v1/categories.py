"""Category endpoints. Reads for any logged-in user; writes for admins only."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from library_catalog.api.deps import get_catalog, unwrap
from library_catalog.api.v1.auth import get_login_session, require_admin
from library_catalog.schemas.catalog import (
    BookListResponse,
    CategoryListResponse,
    CategoryRecord,
    CategoryWrite,
)
from library_catalog.services.catalog import CatalogService
from library_catalog.services.credentials import LoginSession

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def list_categories(
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CategoryListResponse:
    return CategoryListResponse(categories=unwrap(catalog.list_categories(session)))


@router.get("/{category_id}", response_model=CategoryRecord)
def get_category(
    category_id: int,
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CategoryRecord:
    return unwrap(catalog.get_category(session, category_id))


@router.get("/{category_id}/books", response_model=BookListResponse)
def books_in_category(
    category_id: int,
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> BookListResponse:
    books = unwrap(catalog.books_in_category(session, category_id))
    return BookListResponse(books=books, count=len(books))


@router.post("", response_model=CategoryRecord, status_code=status.HTTP_201_CREATED)
def add_category(
    body: CategoryWrite,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CategoryRecord:
    return unwrap(catalog.add_category(session, body.name))


@router.put("/{category_id}", response_model=CategoryRecord)
def update_category(
    category_id: int,
    body: CategoryWrite,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> CategoryRecord:
    return unwrap(catalog.update_category(session, category_id, body.name))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> None:
    """409 while any book is still filed under the category."""
    unwrap(catalog.delete_category(session, category_id))
