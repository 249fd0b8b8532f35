import logging
from typing import List, Optional

import httpx

from book import Book
from library import (
    BookNotFoundError,
    LibraryError,
    MalformedInputError,
    MissingParameterError,
    OutOfStockError,
)

logger = logging.getLogger(__name__)

# Error messages sent by the service, mapped back onto the store's exceptions
_ERRORS_BY_MESSAGE = {
    BookNotFoundError.default_message: BookNotFoundError,
    OutOfStockError.default_message: OutOfStockError,
    MalformedInputError.default_message: MalformedInputError,
    "Missing id": MissingParameterError,
}


class ServiceUnavailableError(LibraryError):
    status_code = 503
    default_message = "Library service unreachable"


class InventoryClient:
    """Client for the inventory HTTP API built on a caller-supplied ``httpx.Client``."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    def list_books(self) -> List[Book]:
        data = self._request("GET", "/books")
        return [Book.from_dict(item) for item in data]

    def get_book(self, book_id: str) -> Book:
        return Book.from_dict(self._request("GET", f"/books/{book_id}"))

    def add_book(self, book: Book) -> Book:
        return Book.from_dict(self._request("POST", "/books", json=book.to_dict()))

    def checkout_book(self, book_id: Optional[str]) -> Book:
        return Book.from_dict(self._request("PATCH", "/checkout", params=_id_params(book_id)))

    def return_book(self, book_id: Optional[str]) -> Book:
        return Book.from_dict(self._request("PATCH", "/return", params=_id_params(book_id)))

    def _request(self, method: str, url: str, **kwargs):
        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise ServiceUnavailableError() from exc
        if resp.is_success:
            return resp.json()
        raise _error_from_response(resp)


def _id_params(book_id: Optional[str]) -> dict:
    return {} if book_id is None else {"id": book_id}


def _error_from_response(resp: httpx.Response) -> LibraryError:
    try:
        message = resp.json().get("error")
    except (ValueError, AttributeError):
        message = None
    error_cls = _ERRORS_BY_MESSAGE.get(message)
    if error_cls is not None:
        return error_cls(message)
    error = LibraryError(message or f"Unexpected response: HTTP {resp.status_code}")
    error.status_code = resp.status_code
    return error
