from sqlalchemy import select
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.orm import Session

from library_api.models.book import Book


class BookRepository:

    @staticmethod
    # Build an unsaved book
    def create(fields: dict[str, object]) -> Book:
        return Book(**fields)

    @staticmethod
    # Insert or update a book; a failed commit is rolled back and re-raised
    def save(db: Session, book: Book) -> Book:
        db.add(book)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(book)
        return book

    @staticmethod
    # Get a book by ID
    def get(db: Session, book_id: int) -> Book | None:
        return db.get(Book, book_id)

    @staticmethod
    # List books matching every criterion, newest first
    def find(db: Session, *criteria: ColumnElement[bool]) -> list[Book]:
        stmt = (
            select(Book)
            .where(*criteria)
            .order_by(Book.created_at.desc(), Book.id.desc())
        )
        return list(db.scalars(stmt).all())

    @staticmethod
    # First book matching every criterion
    def find_one(db: Session, *criteria: ColumnElement[bool]) -> Book | None:
        stmt = select(Book).where(*criteria)
        return db.scalars(stmt).first()

    @staticmethod
    # Delete a book row
    def remove(db: Session, book: Book) -> None:
        db.delete(book)
        db.commit()
