"""
API Routers Package

Router Structure:
- authors.py: /api/authors/* endpoints
- books.py: /api/books/* endpoints
- auth.py: /api/auth/* endpoints (login)

Each router is imported and registered in main.py.
"""

from bookshelf.routers.auth import router as auth_router
from bookshelf.routers.authors import router as authors_router
from bookshelf.routers.books import router as books_router

__all__ = [
    "auth_router",
    "authors_router",
    "books_router",
]
