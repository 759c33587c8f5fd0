from __future__ import annotations
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ColumnElement

from library_api.core.errors import ConflictError, NotFoundError
from library_api.core.logging import get_logger
from library_api.models.author import Author
from library_api.models.book import BookStatus
from library_api.repos.author_repo import AuthorRepository
from library_api.schemas.author import AuthorCreate, AuthorStats, AuthorUpdate, AuthorRead

logger = get_logger(__name__)


class AuthorService:
    """Author records and the author -> books relationship."""

    def __init__(self, db: Session):
        self.db: Session = db

    # Create author
    def create(self, data: AuthorCreate) -> Author:
        author = AuthorRepository.create(data.model_dump())
        author = AuthorRepository.save(self.db, author)
        logger.info("Created author %s", author.id)
        return author

    # List authors, newest first
    def list_authors(self) -> list[Author]:
        return AuthorRepository.find(self.db)

    # Get author by ID
    def get_by_id(self, author_id: int) -> Author:
        author = AuthorRepository.get(self.db, author_id)
        if author is None:
            raise NotFoundError("Author", author_id)
        return author

    def find_by_name(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> list[Author]:
        """
        Substring match on first and/or last name, AND-combined.
        With neither given every author is returned.
        """
        criteria: list[ColumnElement[bool]] = []
        if first_name:
            criteria.append(Author.first_name.contains(first_name, autoescape=True))
        if last_name:
            criteria.append(Author.last_name.contains(last_name, autoescape=True))
        return AuthorRepository.find(self.db, *criteria)

    def search_by_full_name(self, name: str) -> list[Author]:
        """
        Substring match against "first last", first name or last name.
        """
        return AuthorRepository.find(
            self.db,
            or_(
                (Author.first_name + " " + Author.last_name).contains(name, autoescape=True),
                Author.first_name.contains(name, autoescape=True),
                Author.last_name.contains(name, autoescape=True),
            ),
        )

    # Update author (only fields that were sent)
    def update(self, author_id: int, data: AuthorUpdate) -> Author:
        author = self.get_by_id(author_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(author, field, value)
        return AuthorRepository.save(self.db, author)

    # Delete author, refused while books still reference it
    def delete(self, author_id: int) -> None:
        author = self.get_by_id(author_id)
        book_count = len(author.books)
        if book_count > 0:
            logger.warning("Refusing to delete author %s with %d book(s)", author_id, book_count)
            raise ConflictError(
                f"Cannot delete author. Author has {book_count} book(s) associated.",
                details={"book_count": book_count},
            )
        AuthorRepository.remove(self.db, author)
        logger.info("Deleted author %s", author_id)

    # Authors owning at least one book
    def get_authors_with_books(self) -> list[Author]:
        return AuthorRepository.find(self.db, Author.books.any())

    def get_stats(self, author_id: int) -> AuthorStats:
        author = self.get_by_id(author_id)
        statuses = [book.status for book in author.books]
        return AuthorStats(
            author=AuthorRead.model_validate(author),
            total_books=len(statuses),
            available_books=statuses.count(BookStatus.AVAILABLE),
            borrowed_books=statuses.count(BookStatus.BORROWED),
            reserved_books=statuses.count(BookStatus.RESERVED),
        )
