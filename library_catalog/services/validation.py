"""Field rules for books, categories and search input."""

import re
from datetime import date

from library_catalog.core.config import settings
from library_catalog.services.errors import ValidationError

BOOK_ID_MAX_LEN = 50
TITLE_MAX_LEN = 255
AUTHOR_MAX_LEN = 255
CATEGORY_NAME_MAX_LEN = 255

_INTEGER = re.compile(r"[+-]?[0-9]+")


def is_null_or_empty(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def is_valid_integer(value: str | None) -> bool:
    """Optional sign followed by ASCII digits; no whitespace or underscores."""
    if is_null_or_empty(value):
        return False
    return _INTEGER.fullmatch(value) is not None


def current_year() -> int:
    return date.today().year


def is_valid_year(year: int | str | None) -> bool:
    """Year between MIN_BOOK_YEAR and the current year, inclusive. Accepts int or numeric str."""
    if isinstance(year, str):
        if not is_valid_integer(year):
            return False
        year = int(year)
    if not isinstance(year, int) or isinstance(year, bool):
        return False
    return settings.MIN_BOOK_YEAR <= year <= current_year()


def is_valid_book_id(book_id: str | None) -> bool:
    return not is_null_or_empty(book_id) and len(book_id) <= BOOK_ID_MAX_LEN


def is_valid_title(title: str | None) -> bool:
    return not is_null_or_empty(title) and len(title) <= TITLE_MAX_LEN


def is_valid_author(author: str | None) -> bool:
    return not is_null_or_empty(author) and len(author) <= AUTHOR_MAX_LEN


def is_valid_category_name(name: str | None) -> bool:
    return not is_null_or_empty(name) and len(name.strip()) <= CATEGORY_NAME_MAX_LEN


def validate_book(book_id: str, title: str, author: str, year: int) -> None:
    """Raise ValidationError naming the first invalid field."""
    if not is_valid_book_id(book_id):
        raise ValidationError(f"Please enter a valid Book ID (max {BOOK_ID_MAX_LEN} chars).")
    if not is_valid_title(title):
        raise ValidationError(f"Please enter a valid Book Title (max {TITLE_MAX_LEN} chars).")
    if not is_valid_author(author):
        raise ValidationError(f"Please enter a valid Book Author (max {AUTHOR_MAX_LEN} chars).")
    if not is_valid_year(year):
        raise ValidationError(
            f"Please enter a valid Year between {settings.MIN_BOOK_YEAR} and {current_year()}."
        )


def validate_category_name(name: str | None) -> None:
    if not is_valid_category_name(name):
        raise ValidationError(f"Please enter a valid category name (max {CATEGORY_NAME_MAX_LEN} chars).")


def parse_optional_year(raw: str | None, label: str) -> int | None:
    """
    Parse a year typed into a search box. Blank means "no filter".
    Anything else must be an integer, otherwise ValidationError.
    """
    if is_null_or_empty(raw):
        return None
    if not is_valid_integer(raw):
        raise ValidationError(f"Please enter a valid number for {label}.")
    return int(raw)
