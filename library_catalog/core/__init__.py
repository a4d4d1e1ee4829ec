"""Core app configuration and database."""

from library_catalog.core.config import get_settings, settings
from library_catalog.core.database import get_db, session_scope

__all__ = ["get_settings", "settings", "get_db", "session_scope"]
