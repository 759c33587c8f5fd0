from __future__ import annotations
import datetime
import enum
from typing import TYPE_CHECKING
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, Integer, Date, Text, Constraint, UniqueConstraint, Enum
from library_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from library_api.models.author import Author


class BookStatus(str, enum.Enum):
    AVAILABLE = "available"
    BORROWED = "borrowed"
    RESERVED = "reserved"


#Book
class Book(TimestampMixin, Base):
    __tablename__: str = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("authors.id"),
        nullable=True,
        index=True,
    )
    # legacy display name, independent of author_id
    author_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    status: Mapped[BookStatus] = mapped_column(
        Enum(
            BookStatus,
            name="book_status",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
        default=BookStatus.AVAILABLE,
    )

    author: Mapped[Author | None] = relationship("Author", back_populates="books")

    __table_args__: tuple[Constraint, ...] = (
        UniqueConstraint("isbn", name="uq_books_isbn"),
    )
