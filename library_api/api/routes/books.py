from fastapi import APIRouter, Query, Request, Response
from library_api.api.deps import BookServiceDep
from library_api.schemas.book import BookCreate, BookRead, BookStatusUpdate, BookUpdate
from library_api.core.logging import get_logger
from typing import Annotated
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
)
router = APIRouter(prefix="/books", tags=["books"])


@router.post("", response_model=BookRead, status_code=HTTP_201_CREATED)
def create_book(data: BookCreate, service: BookServiceDep):
    return service.create(data)


@router.get("", response_model=list[BookRead])
def list_books(
    request: Request,
    service: BookServiceDep,
    author: Annotated[str | None, Query(description="Exact legacy author name")] = None,
    author_id: Annotated[int | None, Query()] = None,
    title: Annotated[str | None, Query()] = None,
):
    logger = get_logger(__name__, request)
    if author:
        logger.info("Listing books by author name")
        return service.find_by_author_name(author)
    if author_id is not None:
        logger.info("Listing books by author id")
        return service.find_by_author_id(author_id)
    if title:
        logger.info("Searching books by title")
        return service.search_by_title(title)
    logger.info("Listing books")
    return service.list_books()


@router.get("/available", response_model=list[BookRead])
def list_available_books(service: BookServiceDep):
    return service.get_available()


@router.get("/isbn/{isbn}", response_model=BookRead)
def get_book_by_isbn(isbn: str, service: BookServiceDep):
    return service.get_by_isbn(isbn)


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: int, service: BookServiceDep):
    return service.get_by_id(book_id)


@router.patch("/{book_id}", response_model=BookRead)
def update_book(book_id: int, data: BookUpdate, service: BookServiceDep):
    return service.update(book_id, data)


@router.patch("/{book_id}/status", response_model=BookRead)
def update_book_status(book_id: int, data: BookStatusUpdate, service: BookServiceDep):
    return service.update_status(book_id, data.status)


@router.delete("/{book_id}", status_code=HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: BookServiceDep):
    service.delete(book_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
