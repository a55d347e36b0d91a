"""API router aggregator."""
from fastapi import APIRouter

from bookshelf.api.routes import auth, books

api_router = APIRouter()
api_router.include_router(books.router)
api_router.include_router(auth.router)

__all__ = ["api_router"]
