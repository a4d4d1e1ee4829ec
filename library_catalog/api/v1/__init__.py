"""API v1 routes."""

from fastapi import APIRouter

from library_catalog.api.v1 import auth, books, categories, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
