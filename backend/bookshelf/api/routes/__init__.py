"""Route modules for the Bookshelf API."""
from . import auth, books

__all__ = ["auth", "books"]
