from __future__ import annotations
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.errors import ConflictError, NotFoundError
from library_api.core.logging import get_logger
from library_api.models.book import Book, BookStatus
from library_api.repos.author_repo import AuthorRepository
from library_api.repos.book_repo import BookRepository
from library_api.schemas.book import BookCreate, BookUpdate

logger = get_logger(__name__)

ISBN_CONFLICT_MESSAGE = "A book with this ISBN already exists"


def _is_isbn_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: books.isbn"
    # postgres: 'duplicate key value violates unique constraint "uq_books_isbn"'
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in message and ("books.isbn" in message or "uq_books_isbn" in message)


class BookService:
    """Book records, ISBN uniqueness and status changes."""

    def __init__(self, db: Session):
        self.db: Session = db

    def _ensure_author_exists(self, author_id: int | None) -> None:
        if author_id is not None and AuthorRepository.get(self.db, author_id) is None:
            raise NotFoundError("Author", author_id)

    def _save(self, book: Book) -> Book:
        try:
            return BookRepository.save(self.db, book)
        except IntegrityError as e:
            if _is_isbn_violation(e):
                logger.warning("Duplicate ISBN rejected")
                raise ConflictError(ISBN_CONFLICT_MESSAGE) from e
            raise

    # Create book
    def create(self, data: BookCreate) -> Book:
        self._ensure_author_exists(data.author_id)
        book = BookRepository.create(data.model_dump())
        book = self._save(book)
        logger.info("Created book %s (isbn=%s)", book.id, book.isbn)
        return book

    # List books, newest first
    def list_books(self) -> list[Book]:
        return BookRepository.find(self.db)

    # Get book by ID
    def get_by_id(self, book_id: int) -> Book:
        book = BookRepository.get(self.db, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    # Get book by exact ISBN
    def get_by_isbn(self, isbn: str) -> Book:
        book = BookRepository.find_one(self.db, Book.isbn == isbn)
        if book is None:
            raise NotFoundError("Book", isbn, field="ISBN")
        return book

    def find_by_author_name(self, name: str) -> list[Book]:
        """
        Exact match on the legacy author_name column, kept for older clients.
        """
        return BookRepository.find(self.db, Book.author_name == name)

    def find_by_author_id(self, author_id: int) -> list[Book]:
        return BookRepository.find(self.db, Book.author_id == author_id)

    def search_by_title(self, title: str) -> list[Book]:
        return BookRepository.find(self.db, Book.title.contains(title, autoescape=True))

    # Update book (only fields that were sent)
    def update(self, book_id: int, data: BookUpdate) -> Book:
        book = self.get_by_id(book_id)
        changes = data.model_dump(exclude_unset=True)
        if "author_id" in changes:
            self._ensure_author_exists(changes["author_id"])
        for field, value in changes.items():
            setattr(book, field, value)
        return self._save(book)

    # Delete book
    def delete(self, book_id: int) -> None:
        book = self.get_by_id(book_id)
        BookRepository.remove(self.db, book)
        logger.info("Deleted book %s", book_id)

    # Any status may move to any other, including itself
    def update_status(self, book_id: int, status: BookStatus) -> Book:
        book = self.get_by_id(book_id)
        book.status = status
        book = BookRepository.save(self.db, book)
        logger.info("Book %s status set to %s", book_id, status.value)
        return book

    # Books currently available
    def get_available(self) -> list[Book]:
        return BookRepository.find(self.db, Book.status == BookStatus.AVAILABLE)
