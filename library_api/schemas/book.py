from pydantic import BaseModel, field_validator, ConfigDict
from typing import ClassVar
from datetime import date, datetime

from library_api.models.book import BookStatus
from library_api.schemas.validators import require_text, optional_text, validate_isbn

# Book base schema
class BookBase(BaseModel):
    title: str
    isbn: str
    author_id: int | None = None
    author_name: str | None = None
    description: str | None = None
    published_date: date | None = None
    status: BookStatus = BookStatus.AVAILABLE

    @field_validator("title", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> str:
        return require_text(v, "title")

    @field_validator("isbn", mode="before")
    @classmethod
    def check_isbn(cls, v: object) -> str:
        return validate_isbn(v)

    @field_validator("author_name", "description", mode="before")
    @classmethod
    def trim_optional(cls, v: object) -> str | None:
        return optional_text(v, "value")

# Book create schema
class BookCreate(BookBase):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

# Book update schema: only fields explicitly sent are applied
class BookUpdate(BookBase):
    title: str | None = None
    isbn: str | None = None
    status: BookStatus | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: BookStatus | None) -> BookStatus:
        if v is None:
            raise ValueError("status cannot be null")
        return v

# Book status change
class BookStatusUpdate(BaseModel):
    status: BookStatus

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

# Book read schema
class BookRead(BookBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)
