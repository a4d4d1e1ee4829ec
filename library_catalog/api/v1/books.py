"""Book endpoints: list, lookup, title and advanced search (any user); add, update, delete (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from library_catalog.api.deps import get_catalog, unwrap
from library_catalog.api.v1.auth import get_login_session, require_admin
from library_catalog.schemas.catalog import BookListResponse, BookRecord, BookUpdate
from library_catalog.services.catalog import CatalogService
from library_catalog.services.credentials import LoginSession

router = APIRouter()


def _listing(books: list[BookRecord]) -> BookListResponse:
    return BookListResponse(books=books, count=len(books))


@router.get("", response_model=BookListResponse)
def list_books(
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> BookListResponse:
    return _listing(unwrap(catalog.list_books(session)))


@router.get("/search", response_model=BookListResponse)
def search_books(
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
    title: Annotated[str, Query(max_length=255)] = "",
    author: Annotated[str, Query(max_length=255)] = "",
    category_id: int = 0,
    min_year: Annotated[str, Query(max_length=10)] = "",
    max_year: Annotated[str, Query(max_length=10)] = "",
) -> BookListResponse:
    """
    Advanced search. Every parameter is optional; omitted or blank ones, and
    category_id=0, do not filter. Title and author match as case-insensitive
    substrings; years are inclusive. A non-numeric year, or min_year greater
    than max_year, is rejected with 422.
    """
    result = catalog.search_form(session, title, author, category_id, min_year, max_year)
    return _listing(unwrap(result))


@router.get("/search/title", response_model=BookListResponse)
def search_by_title(
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
    q: Annotated[str, Query(max_length=255)] = "",
) -> BookListResponse:
    return _listing(unwrap(catalog.search_by_title(session, q)))


@router.get("/{book_id}", response_model=BookRecord)
def get_book(
    book_id: str,
    session: Annotated[LoginSession, Depends(get_login_session)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> BookRecord:
    return unwrap(catalog.get_book(session, book_id))


@router.post("", response_model=BookRecord, status_code=status.HTTP_201_CREATED)
def add_book(
    body: BookRecord,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> BookRecord:
    return unwrap(catalog.add_book(session, body))


@router.put("/{book_id}", response_model=BookRecord)
def update_book(
    book_id: str,
    body: BookUpdate,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> BookRecord:
    book = BookRecord(id=book_id, **body.model_dump())
    return unwrap(catalog.update_book(session, book))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: str,
    session: Annotated[LoginSession, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog)],
) -> None:
    unwrap(catalog.delete_book(session, book_id))
