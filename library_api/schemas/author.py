from __future__ import annotations
from pydantic import BaseModel, field_validator, ConfigDict, ValidationInfo
from typing import ClassVar
from datetime import date, datetime

from library_api.schemas.book import BookRead
from library_api.schemas.validators import require_text, optional_text

# Author base schema
class AuthorBase(BaseModel):
    first_name: str
    last_name: str
    bio: str | None = None
    birth_date: date | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object, info: ValidationInfo) -> str:
        return require_text(v, info.field_name or "value")

    @field_validator("bio", mode="before")
    @classmethod
    def trim_bio(cls, v: object) -> str | None:
        return optional_text(v, "bio")

# Author create schema
class AuthorCreate(AuthorBase):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

# Author update schema: only fields explicitly sent are applied
class AuthorUpdate(AuthorBase):
    first_name: str | None = None
    last_name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

# Author read schema
class AuthorRead(AuthorBase):
    id: int
    full_name: str
    created_at: datetime
    updated_at: datetime
    books: list[BookRead] = []

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

# Author statistics
class AuthorStats(BaseModel):
    author: AuthorRead
    total_books: int
    available_books: int
    borrowed_books: int
    reserved_books: int

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)
