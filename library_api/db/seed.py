"""
Load a small sample catalogue of authors and books.

Usage: python -m library_api.db.seed

Running it twice is safe: authors are matched by first/last name and
books whose ISBN is already stored are skipped.
"""
from datetime import date
from sqlalchemy.orm import Session

from library_api.core.config import settings
from library_api.core.logging import get_logger, setup_logging
from library_api.db.session import SessionLocal, init_db
from library_api.models.author import Author
from library_api.models.book import Book, BookStatus
from library_api.repos.author_repo import AuthorRepository
from library_api.repos.book_repo import BookRepository
from library_api.schemas.author import AuthorCreate
from library_api.schemas.book import BookCreate
from library_api.services.author_service import AuthorService
from library_api.services.book_service import BookService

logger = get_logger(__name__)

SAMPLE_AUTHORS: list[dict[str, object]] = [
    {
        "first_name": "Harper",
        "last_name": "Lee",
        "bio": "American novelist best known for To Kill a Mockingbird",
        "birth_date": date(1926, 4, 28),
    },
    {
        "first_name": "George",
        "last_name": "Orwell",
        "bio": "English novelist and essayist, journalist and critic",
        "birth_date": date(1903, 6, 25),
    },
    {
        "first_name": "F. Scott",
        "last_name": "Fitzgerald",
        "bio": "American novelist and short story writer",
        "birth_date": date(1896, 9, 24),
    },
    {
        "first_name": "Jane",
        "last_name": "Austen",
        "bio": "English novelist known for her wit and social commentary",
        "birth_date": date(1775, 12, 16),
    },
    {
        "first_name": "J.D.",
        "last_name": "Salinger",
        "bio": "American writer known for his novel The Catcher in the Rye",
        "birth_date": date(1919, 1, 1),
    },
]

# (author index, book fields)
SAMPLE_BOOKS: list[tuple[int, dict[str, object]]] = [
    (0, {
        "title": "To Kill a Mockingbird",
        "isbn": "978-0-06-112008-4",
        "description": "A classic novel about racial injustice and childhood innocence",
        "published_date": date(1960, 7, 11),
        "status": BookStatus.AVAILABLE,
    }),
    (1, {
        "title": "1984",
        "isbn": "978-0-452-28423-4",
        "description": "A dystopian social science fiction novel",
        "published_date": date(1949, 6, 8),
        "status": BookStatus.AVAILABLE,
    }),
    (1, {
        "title": "Animal Farm",
        "isbn": "978-0-452-28424-1",
        "description": "A political allegory about farm animals",
        "published_date": date(1945, 8, 17),
        "status": BookStatus.AVAILABLE,
    }),
    (2, {
        "title": "The Great Gatsby",
        "isbn": "978-0-7432-7356-5",
        "description": "A classic American novel about the Jazz Age",
        "published_date": date(1925, 4, 10),
        "status": BookStatus.BORROWED,
    }),
    (3, {
        "title": "Pride and Prejudice",
        "isbn": "978-0-14-143951-8",
        "description": "A romantic novel about manners and marriage",
        "published_date": date(1813, 1, 28),
        "status": BookStatus.AVAILABLE,
    }),
    (3, {
        "title": "Sense and Sensibility",
        "isbn": "978-0-14-143977-8",
        "description": "Jane Austen's first published novel",
        "published_date": date(1811, 10, 30),
        "status": BookStatus.AVAILABLE,
    }),
    (4, {
        "title": "The Catcher in the Rye",
        "isbn": "978-0-316-76948-8",
        "description": "A controversial novel about teenage rebellion",
        "published_date": date(1951, 7, 16),
        "status": BookStatus.RESERVED,
    }),
]


def seed(db: Session) -> tuple[int, int]:
    """Insert the sample data; returns (authors added, books added)."""
    authors = AuthorService(db)
    books = BookService(db)
    added_authors = added_books = 0

    saved: list[Author] = []
    for fields in SAMPLE_AUTHORS:
        data = AuthorCreate.model_validate(fields)
        author = AuthorRepository.find_one(
            db,
            Author.first_name == data.first_name,
            Author.last_name == data.last_name,
        )
        if author is None:
            author = authors.create(data)
            added_authors += 1
            logger.info("Added author: %s", author.full_name)
        saved.append(author)

    for index, fields in SAMPLE_BOOKS:
        author = saved[index]
        data = BookCreate.model_validate(
            {**fields, "author_id": author.id, "author_name": author.full_name}
        )
        if BookRepository.find_one(db, Book.isbn == data.isbn) is not None:
            logger.info("Skipping existing book: %s", data.title)
            continue
        book = books.create(data)
        added_books += 1
        logger.info("Added book: %s by %s", book.title, author.full_name)

    return added_authors, added_books


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    init_db()
    db = SessionLocal()
    try:
        added_authors, added_books = seed(db)
    finally:
        db.close()
    logger.info("Seeding completed: %d author(s), %d book(s) added", added_authors, added_books)


if __name__ == "__main__":
    main()
