from sqlalchemy import select
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.orm import Session

from library_api.models.author import Author


class AuthorRepository:

    @staticmethod
    # Build an unsaved author
    def create(fields: dict[str, object]) -> Author:
        return Author(**fields)

    @staticmethod
    # Insert or update an author
    def save(db: Session, author: Author) -> Author:
        db.add(author)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(author)
        return author

    @staticmethod
    # Get an author by ID, books loaded
    def get(db: Session, author_id: int) -> Author | None:
        return db.get(Author, author_id)

    @staticmethod
    # List authors matching every criterion, newest first
    def find(db: Session, *criteria: ColumnElement[bool]) -> list[Author]:
        stmt = (
            select(Author)
            .where(*criteria)
            .order_by(Author.created_at.desc(), Author.id.desc())
        )
        return list(db.scalars(stmt).all())

    @staticmethod
    # First author matching every criterion
    def find_one(db: Session, *criteria: ColumnElement[bool]) -> Author | None:
        stmt = select(Author).where(*criteria)
        return db.scalars(stmt).first()

    @staticmethod
    # Delete an author row (books are left untouched)
    def remove(db: Session, author: Author) -> None:
        db.delete(author)
        db.commit()
