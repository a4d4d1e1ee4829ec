"""Book and category records and the request bodies that carry them."""

from pydantic import BaseModel, ConfigDict, Field


class BookRecord(BaseModel):
    """A book as stored: string id, title, author, category id and publication year."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    author: str
    category_id: int
    year: int


class BookUpdate(BaseModel):
    """Mutable fields of a book; the id comes from the URL and never changes."""

    title: str
    author: str
    category_id: int
    year: int


class CategoryRecord(BaseModel):
    """A category as stored. id is None until the store assigns one."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str


class CategoryWrite(BaseModel):
    """Body for creating or renaming a category."""

    name: str = Field(..., max_length=255, description="Category name (must be unique)")


class BookListResponse(BaseModel):
    """A list of books plus its length, for table views."""

    books: list[BookRecord]
    count: int


class CategoryListResponse(BaseModel):
    """All categories."""

    categories: list[CategoryRecord]
