from typing import Annotated
from fastapi import Depends
from sqlalchemy.orm import Session

from library_api.db.session import get_db
from library_api.services.author_service import AuthorService
from library_api.services.book_service import BookService


def get_author_service(db: Annotated[Session, Depends(get_db)]) -> AuthorService:
    return AuthorService(db)


def get_book_service(db: Annotated[Session, Depends(get_db)]) -> BookService:
    return BookService(db)


AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
