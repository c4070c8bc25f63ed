"""
SQLAlchemy Models Package

Model Relationships:
- Author <-> Book: One-to-Many (an author writes many books,
                   a book has at most one author)

Import all models here to:
1. Make them available as: from bookshelf.models import Book, Author
2. Ensure Alembic discovers them for migrations
"""

from bookshelf.models.author import Author
from bookshelf.models.book import Book
from bookshelf.models.user import User

__all__ = [
    "Author",
    "Book",
    "User",
]
