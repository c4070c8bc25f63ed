"""
Author Model

Represents an author in the bookshelf database.

Relationship with Book
======================
Book owns the association (books.author_id foreign key). Author.books is
the inverse side: SQLAlchemy loads it with a query over the indexed
foreign key, and back_populates keeps both sides in sync in memory:

    author.books.append(book)   # book.author is now author
    author.books.remove(book)   # book.author is now None
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

if TYPE_CHECKING:
    from bookshelf.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: One-to-Many, inverse of Book.author. Deleting an author
      deletes its books (ORM cascade plus ON DELETE CASCADE in the schema).

    Example:
        author = Author(first_name="Ursula", last_name="Le Guin")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author's last name"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    # cascade="all" deletes books together with their author, but removing
    # a book from the collection only clears book.author (no delete-orphan).
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
        cascade="all",
        order_by="Book.id",
    )

    def __repr__(self) -> str:
        return (
            f"Author(id={self.id}, first_name='{self.first_name}', "
            f"last_name='{self.last_name}')"
        )
