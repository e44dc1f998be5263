#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and their books.

USAGE:
    python scripts/seed_data.py            # add sample data
    python scripts/seed_data.py --clear    # wipe authors/books first

This script:
1. Connects to the database using bookshelf settings
2. Creates tables if they don't exist
3. Optionally clears existing data
4. Creates each author with their books through AuthorRepository
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookshelf.database import SessionLocal, create_tables
from bookshelf.models import Author, Book, book_authors
from bookshelf.repositories import AuthorRepository
from bookshelf.schemas import AuthorCreate

SAMPLE_AUTHORS = [
    {
        "first_name": "George",
        "last_name": "Orwell",
        "books": [
            {
                "title": "1984",
                "published_date": "1949-06-08",
                "description": "A dystopian novel set in a totalitarian superstate.",
            },
            {
                "title": "Animal Farm",
                "published_date": "1945-08-17",
                "description": "An allegorical novella about a farm run by its animals.",
            },
        ],
    },
    {
        "first_name": "Jane",
        "last_name": "Austen",
        "books": [
            {
                "title": "Pride and Prejudice",
                "published_date": "1813-01-28",
                "description": "The courtship of Elizabeth Bennet and Mr. Darcy.",
            },
            {
                "title": "Emma",
                "published_date": "1815-12-23",
                "description": "A young woman's misguided attempts at matchmaking.",
            },
        ],
    },
    {
        "first_name": "Ernest",
        "middle_name": "Miller",
        "last_name": "Hemingway",
        "books": [
            {
                "title": "The Old Man and the Sea",
                "published_date": "1952-09-01",
                "description": "An aging fisherman's struggle with a giant marlin.",
            },
        ],
    },
    {
        "first_name": "Isaac",
        "last_name": "Asimov",
        "books": [
            {
                "title": "Foundation",
                "published_date": "1951-05-01",
                "description": "A mathematician's plan to shorten a galactic dark age.",
            },
            {
                "title": "I, Robot",
                "published_date": "1950-12-02",
                "description": "Linked stories about the Three Laws of Robotics.",
            },
        ],
    },
    {
        "first_name": "John",
        "middle_name": "Ronald Reuel",
        "last_name": "Tolkien",
        "books": [
            {
                "title": "The Hobbit",
                "published_date": "1937-09-21",
                "description": "Bilbo Baggins' unexpected journey to the Lonely Mountain.",
            },
        ],
    },
]


def clear_data(db: Session) -> None:
    """Remove every author, book and link (including soft-deleted rows)."""
    print("Clearing existing data...")
    db.execute(delete(book_authors))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> list[int]:
    """Create the sample authors with their books; returns the new author ids."""
    print("Creating authors and books...")
    repository = AuthorRepository(db)

    author_ids = []
    for data in SAMPLE_AUTHORS:
        author_ids.append(repository.create(AuthorCreate.model_validate(data)))

    print(f"Created {len(author_ids)} authors.")
    return author_ids


def seed_database(clear_existing: bool = False) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        author_ids = create_authors(db)
        book_count = sum(len(data["books"]) for data in SAMPLE_AUTHORS)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(author_ids)}")
        print(f"  - Books: {book_count}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the bookshelf database")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing authors and books before seeding",
    )
    args = parser.parse_args()
    seed_database(clear_existing=args.clear)
