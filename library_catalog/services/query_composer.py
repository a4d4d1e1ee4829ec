"""
Advanced book search: turn up to five optional criteria into one filtered query.

Only the criteria that are present become filters. Filters and their bound
values are kept in the same tuple, so the positional SQL rendering and the
parameter list can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy.sql.elements import ColumnElement

from library_catalog.services.errors import ValidationError

Operator = Literal["contains", "eq", "ge", "le"]

BOOK_COLUMNS = "id, title, author, category_id, year"
BASE_SELECT = f"SELECT {BOOK_COLUMNS} FROM books WHERE 1=1"

_LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class SearchCriteria:
    """Optional search inputs. None means the dimension is unconstrained."""

    title: str | None = None
    author: str | None = None
    category_id: int | None = None
    min_year: int | None = None
    max_year: int | None = None


@dataclass(frozen=True)
class Filter:
    """One predicate on a books column."""

    column: str
    op: Operator
    value: str | int

    def sql(self) -> str:
        if self.op == "contains":
            return f"LOWER({self.column}) LIKE LOWER(?) ESCAPE '{_LIKE_ESCAPE}'"
        symbol = {"eq": "=", "ge": ">=", "le": "<="}[self.op]
        return f"{self.column} {symbol} ?"

    def bind_value(self) -> str | int:
        if self.op == "contains":
            return f"%{_escape_like(str(self.value))}%"
        return self.value

    def expression(self, model: Any) -> ColumnElement[bool]:
        column = getattr(model, self.column)
        if self.op == "contains":
            return column.icontains(self.value, autoescape=True)
        if self.op == "eq":
            return column == self.value
        if self.op == "ge":
            return column >= self.value
        return column <= self.value

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.column)
        if self.op == "contains":
            return str(self.value).casefold() in (actual or "").casefold()
        if self.op == "eq":
            return actual == self.value
        if self.op == "ge":
            return actual >= self.value
        return actual <= self.value


@dataclass(frozen=True)
class QuerySpec:
    """Ordered filters, all combined with AND. No filters matches every book."""

    filters: tuple[Filter, ...] = ()

    @property
    def params(self) -> tuple[str | int, ...]:
        return tuple(f.bind_value() for f in self.filters)

    @property
    def is_unfiltered(self) -> bool:
        return not self.filters

    def to_sql(self, base: str = BASE_SELECT) -> tuple[str, tuple[str | int, ...]]:
        """Render as positional-parameter SQL (qmark style) plus its bound values."""
        sql = base + "".join(f" AND {f.sql()}" for f in self.filters)
        return sql, self.params

    def where_clauses(self, model: Any) -> list[ColumnElement[bool]]:
        """SQLAlchemy expressions against an ORM model with the books columns."""
        return [f.expression(model) for f in self.filters]

    def matches(self, record: Any) -> bool:
        return all(f.matches(record) for f in self.filters)


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _present(text: str | None) -> bool:
    return text is not None and text.strip() != ""


def compose_search(criteria: SearchCriteria) -> QuerySpec:
    """
    Build the QuerySpec for criteria, in the order title, author, category,
    min year, max year. min_year > max_year is not special-cased here; callers
    reject it first with validate_search_criteria.
    """
    filters: list[Filter] = []
    if _present(criteria.title):
        filters.append(Filter("title", "contains", criteria.title))
    if _present(criteria.author):
        filters.append(Filter("author", "contains", criteria.author))
    if criteria.category_id is not None:
        filters.append(Filter("category_id", "eq", criteria.category_id))
    if criteria.min_year is not None:
        filters.append(Filter("year", "ge", criteria.min_year))
    if criteria.max_year is not None:
        filters.append(Filter("year", "le", criteria.max_year))
    return QuerySpec(tuple(filters))


def validate_search_criteria(criteria: SearchCriteria) -> None:
    """Reject a year range that can never match."""
    if (
        criteria.min_year is not None
        and criteria.max_year is not None
        and criteria.min_year > criteria.max_year
    ):
        raise ValidationError("Min Year cannot be greater than Max Year.")


def criteria_from_legacy(
    title: str | None = "",
    author: str | None = "",
    category_id: int = 0,
    min_year: int = 0,
    max_year: int = 0,
) -> SearchCriteria:
    """
    Map sentinel-encoded inputs (blank string, integer <= 0 means absent)
    onto SearchCriteria.
    """
    return SearchCriteria(
        title=title if _present(title) else None,
        author=author if _present(author) else None,
        category_id=category_id if category_id and category_id > 0 else None,
        min_year=min_year if min_year and min_year > 0 else None,
        max_year=max_year if max_year and max_year > 0 else None,
    )
