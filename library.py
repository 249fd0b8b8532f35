import logging
from threading import RLock
from typing import Dict, Iterable, List, Optional

from book import Book

logger = logging.getLogger(__name__)


def default_books() -> List[Book]:
    """Fresh copies of the records every new inventory starts with."""
    return [
        Book(id="1", title="Book 1", author="Author 1", quantity=2),
        Book(id="2", title="Book 2", author="Author 2", quantity=5),
        Book(id="3", title="Book 3", author="Author 3", quantity=6),
    ]


class Library:
    """Manages the in-memory collection of books.

    Records are kept in insertion order. Ids are not unique: lookups resolve to
    the first record added under a given id. Every read and mutation runs under
    a single lock so the store can be shared by concurrent request handlers.
    """

    def __init__(self, books: Optional[Iterable[Book]] = None) -> None:
        self._lock = RLock()
        self.books: List[Book] = []
        self._index: Dict[str, Book] = {}
        for book in books or []:
            self._append(book)

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> List[Book]:
        with self._lock:
            return list(self.books)

    def find_book(self, book_id: str) -> Book:
        """Return the stored record for ``book_id`` (not a copy)."""
        with self._lock:
            book = self._index.get(book_id)
        if book is None:
            raise BookNotFoundError()
        return book

    def add_book(self, book: Book) -> Book:
        """Append a record. No uniqueness or content checks are made."""
        with self._lock:
            self._append(book)
        logger.info(f"Book added: id={book.id!r}, quantity={book.quantity}")
        return book

    def checkout_book(self, book_id: Optional[str]) -> Book:
        """Take one copy out of stock."""
        _require_id(book_id)
        with self._lock:
            book = self.find_book(book_id)
            if book.quantity == 0:
                logger.warning(f"Checkout refused, book {book_id!r} is out of stock")
                raise OutOfStockError()
            book.quantity -= 1
        logger.info(f"Book checked out: id={book_id!r}, remaining={book.quantity}")
        return book

    def return_book(self, book_id: Optional[str]) -> Book:
        """Put one copy back in stock. There is no upper bound."""
        _require_id(book_id)
        with self._lock:
            book = self.find_book(book_id)
            book.quantity += 1
        logger.info(f"Book returned: id={book_id!r}, available={book.quantity}")
        return book

    def count(self) -> int:
        with self._lock:
            return len(self.books)

    # ------------------------- Internals ------------------------- #
    def _append(self, book: Book) -> None:
        self.books.append(book)
        self._index.setdefault(book.id, book)


def _require_id(book_id: Optional[str]) -> None:
    if not book_id:
        logger.warning("Request rejected: missing book id")
        raise MissingParameterError("Missing id")


class LibraryError(Exception):
    """Base class for inventory errors; ``status_code`` is the HTTP mapping."""

    status_code = 500
    default_message = "Library error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class BookNotFoundError(LibraryError, LookupError):
    status_code = 404
    default_message = "Book not found"


class OutOfStockError(LibraryError, ValueError):
    status_code = 400
    default_message = "Book out of stock"


class MissingParameterError(LibraryError, ValueError):
    status_code = 400
    default_message = "Missing parameter"


class MalformedInputError(LibraryError, ValueError):
    status_code = 400
    default_message = "Invalid book data"
