"""
Tests for the Repository Service

Paging, lookups and the author/book association at the persistence level.
"""

import pytest
from sqlalchemy.orm import Session

from bookshelf.exceptions import NotFoundError
from bookshelf.models import Author, Book
from bookshelf.services.repository import AuthorRepository, BookRepository


class TestListPage:
    def test_first_page(self, db_session: Session, multiple_books: list[Book]):
        page = BookRepository(db_session).list_page(1, 3)

        assert [b.id for b in page] == [b.id for b in multiple_books[:3]]

    def test_pages_do_not_overlap(self, db_session: Session, multiple_books: list[Book]):
        repo = BookRepository(db_session)

        seen = [b.id for page in (1, 2, 3) for b in repo.list_page(page, 3)]

        assert seen == sorted(b.id for b in multiple_books)

    def test_page_past_the_end_is_empty(self, db_session: Session, multiple_books: list[Book]):
        assert list(BookRepository(db_session).list_page(4, 3)) == []

    def test_offset_beyond_integer_range_is_empty(self, db_session: Session, multiple_books: list[Book]):
        assert list(BookRepository(db_session).list_page(2 ** 64, 3)) == []

    def test_empty_table(self, db_session: Session):
        assert list(AuthorRepository(db_session).list_page(1, 3)) == []

    @pytest.mark.parametrize("page, per_page", [(0, 3), (1, 0), (-1, 3)])
    def test_rejects_non_positive_arguments(self, db_session: Session, page, per_page):
        with pytest.raises(ValueError):
            BookRepository(db_session).list_page(page, per_page)


class TestLookups:
    def test_get_existing(self, db_session: Session, sample_author: Author):
        assert AuthorRepository(db_session).get(sample_author.id) is sample_author

    def test_get_missing(self, db_session: Session):
        assert BookRepository(db_session).get(12345) is None

    @pytest.mark.parametrize("entity_id", [0, -1, 2 ** 63, 99999999999999999999])
    def test_get_out_of_range(self, db_session: Session, entity_id):
        assert BookRepository(db_session).get(entity_id) is None

    def test_get_or_404_missing(self, db_session: Session):
        with pytest.raises(NotFoundError) as exc_info:
            BookRepository(db_session).get_or_404(12345)

        assert str(exc_info.value) == "Book with id 12345 not found"
        assert exc_info.value.entity_id == 12345

    def test_list_all_ordered_by_id(self, db_session: Session, sample_author: Author, second_author: Author):
        authors = AuthorRepository(db_session).list_all()

        assert [a.id for a in authors] == [sample_author.id, second_author.id]

    def test_count(self, db_session: Session, multiple_books: list[Book]):
        assert BookRepository(db_session).count() == len(multiple_books)

    def test_list_by_author(self, db_session: Session, sample_author: Author, multiple_books: list[Book]):
        books = BookRepository(db_session).list_by_author(sample_author.id)

        assert [b.id for b in books] == [b.id for b in multiple_books if b.author_id == sample_author.id]


class TestAssociation:
    def test_both_sides_stay_in_sync(self, db_session: Session, sample_author: Author):
        book = Book(title="Lavinia")
        book.author = sample_author

        assert book in sample_author.books

        book.author = None
        assert book not in sample_author.books

    def test_deleting_author_deletes_books(self, db_session: Session, sample_book: Book):
        repo = AuthorRepository(db_session)
        book_id = sample_book.id

        repo.delete(repo.get_or_404(sample_book.author_id))
        repo.commit()

        assert BookRepository(db_session).get(book_id) is None

    def test_deleting_book_keeps_author(self, db_session: Session, sample_book: Book):
        author_id = sample_book.author_id
        repo = BookRepository(db_session)

        repo.delete(sample_book)
        repo.commit()

        author = AuthorRepository(db_session).get(author_id)
        assert author is not None
        assert author.books == []
