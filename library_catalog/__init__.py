"""Library catalogue: books, categories and an ADMIN/USER login gate."""

__version__ = "0.1.0"
