from fastapi import APIRouter, Query, Request, Response
from library_api.api.deps import AuthorServiceDep
from library_api.schemas.author import AuthorCreate, AuthorRead, AuthorStats, AuthorUpdate
from library_api.core.logging import get_logger
from typing import Annotated
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
)
router = APIRouter(prefix="/authors", tags=["authors"])


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(data: AuthorCreate, service: AuthorServiceDep):
    return service.create(data)


@router.get("", response_model=list[AuthorRead])
def list_authors(
    request: Request,
    service: AuthorServiceDep,
    first_name: Annotated[str | None, Query()] = None,
    last_name: Annotated[str | None, Query()] = None,
    name: Annotated[str | None, Query()] = None,
):
    logger = get_logger(__name__, request)
    if name:
        logger.info("Searching authors by full name")
        return service.search_by_full_name(name)
    if first_name or last_name:
        logger.info("Searching authors by first/last name")
        return service.find_by_name(first_name, last_name)
    logger.info("Listing authors")
    return service.list_authors()


@router.get("/with-books", response_model=list[AuthorRead])
def list_authors_with_books(service: AuthorServiceDep):
    return service.get_authors_with_books()


@router.get("/{author_id}", response_model=AuthorRead)
def get_author(author_id: int, service: AuthorServiceDep):
    return service.get_by_id(author_id)


@router.get("/{author_id}/stats", response_model=AuthorStats)
def get_author_stats(author_id: int, service: AuthorServiceDep):
    return service.get_stats(author_id)


@router.patch("/{author_id}", response_model=AuthorRead)
def update_author(author_id: int, data: AuthorUpdate, service: AuthorServiceDep):
    return service.update(author_id, data)


@router.delete("/{author_id}", status_code=HTTP_204_NO_CONTENT)
def delete_author(author_id: int, service: AuthorServiceDep):
    service.delete(author_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
