"""
Repository Service

Persistence gateway used by the routers.

A repository wraps the request's Session and exposes lookups
(get, list_all, list_page) plus staging and committing writes.
Results are always ordered by id, so pages are stable.

Usage:
    repo = BookRepository(db)
    books = repo.list_page(page=2, per_page=3)   # offset 3, limit 3
    book = repo.get_or_404(book_id)
"""

import logging
from typing import Generic, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from bookshelf.database import Base
from bookshelf.exceptions import NotFoundError
from bookshelf.models import Author, Book

logger = logging.getLogger(__name__)

# Largest value a BIGINT / SQLite INTEGER column can hold
MAX_DB_INT = 2 ** 63 - 1

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Generic repository over one model class.

    Subclasses set `model` and may set `load_options` to eager-load
    relationships and avoid N+1 queries.
    """

    model: type[ModelT]
    load_options: tuple = ()

    def __init__(self, db: Session) -> None:
        self.db = db

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _select(self):
        return select(self.model).options(*self.load_options)

    def get(self, entity_id: int) -> ModelT | None:
        """
        Find an entity by id, None when it does not exist.

        Ids outside the database integer range cannot exist and are
        reported as missing without querying.
        """
        if not 1 <= entity_id <= MAX_DB_INT:
            return None
        stmt = self._select().where(self.model.id == entity_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_or_404(self, entity_id: int) -> ModelT:
        """
        Find an entity by id.

        Raises:
            NotFoundError: If no entity has this id
        """
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def list_all(self) -> Sequence[ModelT]:
        stmt = self._select().order_by(self.model.id)
        return self.db.execute(stmt).scalars().all()

    def list_page(self, page: int, per_page: int) -> Sequence[ModelT]:
        """
        Return one page of entities ordered by id.

        Page 1 → skip 0 items, page 2 → skip per_page items, ...

        Raises:
            ValueError: If page or per_page is below 1
        """
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be >= 1")
        offset = (page - 1) * per_page
        if offset > MAX_DB_INT:
            return []
        stmt = (
            self._select()
            .order_by(self.model.id)
            .offset(offset)
            .limit(min(per_page, MAX_DB_INT))
        )
        return self.db.execute(stmt).scalars().all()

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        return self.db.execute(stmt).scalar() or 0

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)

    def commit(self) -> None:
        """
        Commit the request's unit of work.

        Rolls back and re-raises on database errors, so a failed write
        leaves nothing behind.
        """
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.exception(f"Commit failed for {self.entity_name}")
            self.db.rollback()
            raise

    def refresh(self, entity: ModelT) -> ModelT:
        self.db.refresh(entity)
        return entity


class AuthorRepository(Repository[Author]):
    model = Author
    load_options = (selectinload(Author.books),)


class BookRepository(Repository[Book]):
    model = Book
    load_options = (selectinload(Book.author),)

    def list_by_author(self, author_id: int) -> Sequence[Book]:
        """Books written by an author (the inverse side of Book.author)."""
        stmt = (
            self._select()
            .where(Book.author_id == author_id)
            .order_by(Book.id)
        )
        return self.db.execute(stmt).scalars().all()
