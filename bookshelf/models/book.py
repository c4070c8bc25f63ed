"""
Book Model

Books belong to at most one author. The books table holds the foreign key,
which makes Book the owning side of the relationship.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

if TYPE_CHECKING:
    from bookshelf.models.author import Author


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required)
    - cover_text: Back-cover blurb
    - comment: Editorial comment, only exposed from API version 2.0
    - author_id: Owning foreign key, nullable

    Example:
        book = Book(title="Dune", cover_text="Arrakis...", author=author)
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Book title"
    )

    cover_text: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Back-cover text"
    )

    comment: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Editorial comment (API version 2.0+)"
    )

    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
        comment="Author of the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    author: Mapped["Author | None"] = relationship(
        "Author",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author_id={self.author_id})"
