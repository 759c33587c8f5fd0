import pytest
from datetime import date
from sqlalchemy.exc import IntegrityError

from library_api.core.errors import ConflictError, NotFoundError
from library_api.models.book import BookStatus
from library_api.schemas.author import AuthorCreate, AuthorUpdate
from library_api.schemas.book import BookCreate, BookUpdate


def _author(service, first_name="George", last_name="Orwell", **extra):
    return service.create(AuthorCreate(first_name=first_name, last_name=last_name, **extra))


def _book(service, title="1984", isbn="978-0-452-28423-4", **extra):
    return service.create(BookCreate(title=title, isbn=isbn, **extra))


class TestAuthorService:
    """Test author service layer."""

    def test_create_author_success(self, author_service):
        """Create then get returns the input plus id and timestamps."""
        created = _author(
            author_service, bio="English novelist", birth_date=date(1903, 6, 25)
        )

        fetched = author_service.get_by_id(created.id)
        assert fetched.id is not None
        assert fetched.first_name == "George"
        assert fetched.last_name == "Orwell"
        assert fetched.bio == "English novelist"
        assert fetched.birth_date == date(1903, 6, 25)
        assert fetched.created_at is not None
        assert fetched.updated_at is not None
        assert fetched.books == []
        assert fetched.full_name == "George Orwell"

    def test_get_missing_author(self, author_service):
        with pytest.raises(NotFoundError, match="Author with ID 999 not found"):
            author_service.get_by_id(999)

    def test_list_authors_empty(self, author_service):
        assert author_service.list_authors() == []

    def test_list_authors_newest_first(self, author_service):
        first = _author(author_service, "Jane", "Austen")
        second = _author(author_service, "Harper", "Lee")

        authors = author_service.list_authors()
        assert [a.id for a in authors] == [second.id, first.id]

    def test_list_authors_includes_books(self, author_service, book_service):
        author = _author(author_service)
        _book(book_service, author_id=author.id)

        [listed] = author_service.list_authors()
        assert [b.title for b in listed.books] == ["1984"]

    def test_find_by_name(self, author_service):
        _author(author_service, "George", "Orwell")
        _author(author_service, "George", "Eliot")
        _author(author_service, "Jane", "Austen")

        assert len(author_service.find_by_name(first_name="Geo")) == 2
        assert [a.last_name for a in author_service.find_by_name(last_name="well")] == ["Orwell"]
        both = author_service.find_by_name(first_name="George", last_name="Eli")
        assert [a.last_name for a in both] == ["Eliot"]

    def test_find_by_name_without_filters_returns_all(self, author_service):
        _author(author_service, "George", "Orwell")
        _author(author_service, "Jane", "Austen")

        assert len(author_service.find_by_name()) == 2

    def test_search_by_full_name(self, author_service):
        _author(author_service, "F. Scott", "Fitzgerald")
        _author(author_service, "Jane", "Austen")

        assert [a.last_name for a in author_service.search_by_full_name("Scott Fitz")] == ["Fitzgerald"]
        assert [a.last_name for a in author_service.search_by_full_name("Austen")] == ["Austen"]
        assert [a.first_name for a in author_service.search_by_full_name("Jane")] == ["Jane"]
        assert author_service.search_by_full_name("Tolkien") == []

    def test_name_search_treats_wildcards_literally(self, author_service):
        _author(author_service, "Jane", "Austen")
        _author(author_service, "100%", "Anonymous")

        assert [a.last_name for a in author_service.search_by_full_name("%")] == ["Anonymous"]
        assert author_service.search_by_full_name("_") == []
        assert [a.last_name for a in author_service.find_by_name(first_name="%")] == ["Anonymous"]
        assert author_service.find_by_name(last_name="_") == []

    def test_update_author_partial(self, author_service):
        author = _author(author_service, bio="Old bio")

        updated = author_service.update(author.id, AuthorUpdate(bio="New bio"))
        assert updated.bio == "New bio"
        assert updated.first_name == "George"
        assert updated.last_name == "Orwell"

    def test_update_missing_author(self, author_service):
        with pytest.raises(NotFoundError):
            author_service.update(42, AuthorUpdate(bio="x"))

    def test_delete_author_without_books(self, author_service):
        author = _author(author_service)

        author_service.delete(author.id)

        with pytest.raises(NotFoundError):
            author_service.get_by_id(author.id)

    def test_delete_author_with_books_conflicts(self, author_service, book_service):
        author = _author(author_service)
        _book(book_service, author_id=author.id)

        with pytest.raises(ConflictError, match=r"1 book\(s\)") as exc_info:
            author_service.delete(author.id)
        assert exc_info.value.details == {"book_count": 1}

        assert author_service.get_by_id(author.id).id == author.id

    def test_delete_missing_author(self, author_service):
        with pytest.raises(NotFoundError):
            author_service.delete(7)

    def test_authors_with_books(self, author_service, book_service):
        with_books = _author(author_service, "George", "Orwell")
        _author(author_service, "Jane", "Austen")
        _book(book_service, author_id=with_books.id)

        result = author_service.get_authors_with_books()
        assert [a.id for a in result] == [with_books.id]
        assert len(result[0].books) == 1

    def test_stats(self, author_service, book_service):
        author = _author(author_service)
        _book(book_service, isbn="978-0-452-28423-4", author_id=author.id)
        _book(book_service, title="Animal Farm", isbn="978-0-452-28424-1",
              author_id=author.id, status=BookStatus.BORROWED)
        _book(book_service, title="Homage to Catalonia", isbn="0-306-40615-2",
              author_id=author.id, status=BookStatus.RESERVED)

        stats = author_service.get_stats(author.id)
        assert stats.author.id == author.id
        assert stats.total_books == 3
        assert stats.available_books == 1
        assert stats.borrowed_books == 1
        assert stats.reserved_books == 1
        assert stats.total_books == (
            stats.available_books + stats.borrowed_books + stats.reserved_books
        )

    def test_stats_missing_author(self, author_service):
        with pytest.raises(NotFoundError):
            author_service.get_stats(1)


class TestBookService:
    """Test book service layer."""

    def test_create_book_success(self, book_service):
        created = _book(book_service, description="Dystopia", published_date=date(1949, 6, 8))

        fetched = book_service.get_by_id(created.id)
        assert fetched.title == "1984"
        assert fetched.isbn == "978-0-452-28423-4"
        assert fetched.description == "Dystopia"
        assert fetched.published_date == date(1949, 6, 8)
        assert fetched.status is BookStatus.AVAILABLE
        assert fetched.author_id is None
        assert fetched.created_at is not None

    def test_create_duplicate_isbn_conflicts(self, book_service):
        _book(book_service)

        with pytest.raises(ConflictError, match="A book with this ISBN already exists"):
            _book(book_service, title="Another title")

        books = book_service.list_books()
        assert len(books) == 1
        assert books[0].title == "1984"

    def test_create_with_unknown_author(self, book_service):
        with pytest.raises(NotFoundError, match="Author with ID 404 not found"):
            _book(book_service, author_id=404)
        assert book_service.list_books() == []

    def test_create_other_storage_error_propagates(self, book_service):
        # NOT NULL failure on title, not an ISBN clash
        data = BookCreate.model_construct(
            title=None,
            isbn="978-0-452-28423-4",
            author_id=None,
            author_name=None,
            description=None,
            published_date=None,
            status=BookStatus.AVAILABLE,
        )

        with pytest.raises(IntegrityError) as exc_info:
            book_service.create(data)
        assert not isinstance(exc_info.value, ConflictError)
        assert book_service.list_books() == []

    def test_list_books_newest_first(self, book_service):
        first = _book(book_service)
        second = _book(book_service, title="Animal Farm", isbn="978-0-452-28424-1")

        assert [b.id for b in book_service.list_books()] == [second.id, first.id]

    def test_get_missing_book(self, book_service):
        with pytest.raises(NotFoundError, match="Book with ID 5 not found"):
            book_service.get_by_id(5)

    def test_get_by_isbn(self, book_service):
        book = _book(book_service)

        assert book_service.get_by_isbn("978-0-452-28423-4").id == book.id
        with pytest.raises(NotFoundError, match="Book with ISBN 000 not found"):
            book_service.get_by_isbn("000")

    def test_find_by_author_name_is_exact(self, book_service):
        _book(book_service, author_name="George Orwell")

        assert len(book_service.find_by_author_name("George Orwell")) == 1
        assert book_service.find_by_author_name("Orwell") == []

    def test_find_by_author_id(self, author_service, book_service):
        """Orwell scenario: one book by author id, stats reflect it."""
        author = _author(author_service)
        book = _book(book_service, author_id=author.id)
        _book(book_service, title="The Great Gatsby", isbn="978-0-7432-7356-5")

        books = book_service.find_by_author_id(author.id)
        assert [b.id for b in books] == [book.id]

        stats = author_service.get_stats(author.id)
        assert (stats.total_books, stats.available_books, stats.borrowed_books, stats.reserved_books) == (1, 1, 0, 0)

    def test_search_by_title(self, book_service):
        _book(book_service, title="The Great Gatsby", isbn="978-0-7432-7356-5")
        _book(book_service)

        assert [b.title for b in book_service.search_by_title("Gatsby")] == ["The Great Gatsby"]

    def test_search_by_title_treats_wildcards_literally(self, book_service):
        _book(book_service, title="a_b", isbn="978-0-7432-7356-5")
        _book(book_service)

        assert [b.title for b in book_service.search_by_title("_")] == ["a_b"]
        assert book_service.search_by_title("%") == []

    def test_update_book_partial(self, book_service):
        book = _book(book_service, description="Old")

        updated = book_service.update(book.id, BookUpdate(description="New"))
        assert updated.description == "New"
        assert updated.title == "1984"
        assert updated.isbn == "978-0-452-28423-4"

    def test_update_duplicate_isbn_leaves_data_unchanged(self, book_service):
        _book(book_service)
        other = _book(book_service, title="The Great Gatsby", isbn="978-0-7432-7356-5")

        with pytest.raises(ConflictError):
            book_service.update(other.id, BookUpdate(isbn="978-0-452-28423-4", title="Changed"))

        reloaded = book_service.get_by_id(other.id)
        assert reloaded.isbn == "978-0-7432-7356-5"
        assert reloaded.title == "The Great Gatsby"

    def test_update_missing_book(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.update(99, BookUpdate(title="x"))

    def test_update_with_unknown_author(self, book_service):
        book = _book(book_service)
        with pytest.raises(NotFoundError):
            book_service.update(book.id, BookUpdate(author_id=12345))

    def test_delete_book(self, book_service):
        book = _book(book_service)

        book_service.delete(book.id)

        with pytest.raises(NotFoundError):
            book_service.get_by_id(book.id)

    def test_delete_missing_book(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.delete(3)

    def test_update_status_any_transition(self, book_service):
        book = _book(book_service)

        for status in (BookStatus.BORROWED, BookStatus.RESERVED, BookStatus.AVAILABLE, BookStatus.RESERVED):
            assert book_service.update_status(book.id, status).status is status

    def test_update_status_idempotent(self, book_service):
        book = _book(book_service)

        once = book_service.update_status(book.id, BookStatus.BORROWED)
        snapshot = (once.status, once.title, once.isbn, once.updated_at)
        twice = book_service.update_status(book.id, BookStatus.BORROWED)
        assert (twice.status, twice.title, twice.isbn, twice.updated_at) == snapshot

    def test_update_status_missing_book(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.update_status(1, BookStatus.BORROWED)

    def test_get_available(self, book_service):
        available = _book(book_service)
        _book(book_service, title="The Great Gatsby", isbn="978-0-7432-7356-5",
              status=BookStatus.BORROWED)

        assert [b.id for b in book_service.get_available()] == [available.id]


class TestAuthorBookWorkflow:
    """Delete protection across both services."""

    def test_delete_author_after_removing_books(self, author_service, book_service):
        author = _author(author_service)
        book = _book(book_service, author_id=author.id)

        with pytest.raises(ConflictError, match=r"Author has 1 book\(s\) associated"):
            author_service.delete(author.id)

        book_service.delete(book.id)
        author_service.delete(author.id)

        with pytest.raises(NotFoundError):
            author_service.get_by_id(author.id)

    def test_author_name_is_independent_of_author_id(self, author_service, book_service):
        author = _author(author_service)
        book = _book(book_service, author_id=author.id, author_name="Eric Blair")

        assert book.author_id == author.id
        assert book_service.find_by_author_name("Eric Blair")[0].id == book.id
        assert book_service.find_by_author_name("George Orwell") == []
