from __future__ import annotations
import datetime
from typing import TYPE_CHECKING
from sqlalchemy import Date, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from library_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


def format_full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


#Author
class Author(TimestampMixin, Base):
    __tablename__: str = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    birth_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    # derived by join on author_id, never written through the author row
    books: Mapped[list[Book]] = relationship(
        "Book",
        back_populates="author",
        lazy="selectin",
        order_by="Book.id",
        passive_deletes="all",
    )

    @property
    def full_name(self) -> str:
        return format_full_name(self.first_name, self.last_name)
