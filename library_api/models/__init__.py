from .base import Base
from .author import Author
from .book import Book, BookStatus

__all__ = ["Base", "Author", "Book", "BookStatus"]
