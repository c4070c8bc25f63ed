#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development and testing.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data
3. Creates 10 authors and 100 books, each book with a random author
4. Creates two accounts:
   - admin@bookshelf.dev / AdminPass123  (administrator, may write)
   - user@bookshelf.dev  / UserPass123   (regular user, read only)
"""

import random
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookshelf.database import SessionLocal, create_tables
from bookshelf.models import Author, Book, User
from bookshelf.services.security import hash_password

AUTHOR_COUNT = 10
BOOK_COUNT = 100


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> list[Author]:
    print("Creating authors...")
    authors = [
        Author(first_name=f"Firstname {i}", last_name=f"Lastname {i}")
        for i in range(AUTHOR_COUNT)
    ]
    db.add_all(authors)
    db.commit()

    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: list[Author], rng: random.Random) -> list[Book]:
    print("Creating books...")
    books = [
        Book(
            title=f"Title {i}",
            cover_text=f"Cover text {i}",
            comment=f"Comment {i}",
            author=rng.choice(authors),
        )
        for i in range(BOOK_COUNT)
    ]
    db.add_all(books)
    db.commit()

    print(f"Created {len(books)} books.")
    return books


def create_users(db: Session) -> list[User]:
    print("Creating users...")
    users = [
        User(
            email="admin@bookshelf.dev",
            hashed_password=hash_password("AdminPass123"),
            is_superuser=True,
        ),
        User(
            email="user@bookshelf.dev",
            hashed_password=hash_password("UserPass123"),
        ),
    ]
    db.add_all(users)
    db.commit()

    print(f"Created {len(users)} users.")
    return users


def seed_database(clear_existing: bool = True, seed: int | None = None) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
        seed: Random seed for the book → author assignment.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()
    rng = random.Random(seed)

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors, rng)
        users = create_users(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Users: {len(users)}")
        print("\nYou can now access the API at http://localhost:8001/api")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
