import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, model_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from book import Book
from config import settings
from library import Library, LibraryError, MalformedInputError, default_books

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with a 4-space indent for readability."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=4).encode("utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Each application run owns a fresh inventory
    app.state.library = Library(default_books() if settings.seed_books else [])
    logger.info(f"Inventory ready with {app.state.library.count()} books")
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    default_response_class=IndentedJSONResponse,
)


# --- Request logging ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


# --- Error handling ---
def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> IndentedJSONResponse:
    return IndentedJSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request body on {request.method} {request.url.path}: {exc.errors()}")
    error = MalformedInputError()
    return _error_response(error.status_code, error.message)


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """Dependency returning the inventory owned by the running application."""
    return request.app.state.library


# --- Models ---
class BookModel(BaseModel):
    # Wrong JSON types are rejected rather than coerced
    model_config = ConfigDict(strict=True)

    id: str = ""
    title: str = ""
    author: str = ""
    quantity: int = 0

    @model_validator(mode="before")
    @classmethod
    def _null_as_zero_value(cls, data: Any) -> Any:
        # An explicit null binds like an absent field
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class HealthModel(BaseModel):
    status: str
    books: int


def _to_model(book: Book) -> BookModel:
    return BookModel(**book.to_dict())


# --- API Endpoints ---
@app.get("/health", response_model=HealthModel)
def health(library: Library = Depends(get_library)):
    return HealthModel(status="ok", books=library.count())


@app.get("/books", response_model=List[BookModel])
def list_books(library: Library = Depends(get_library)):
    """List every book in insertion order."""
    return [_to_model(b) for b in library.list_books()]


@app.get("/books/{book_id}", response_model=BookModel)
def get_book(book_id: str, library: Library = Depends(get_library)):
    return _to_model(library.find_book(book_id))


@app.post("/books", response_model=BookModel, status_code=201)
def create_book(payload: BookModel, library: Library = Depends(get_library)):
    """Append a book to the inventory as given."""
    book = library.add_book(Book(**payload.model_dump()))
    return _to_model(book)


@app.patch("/checkout", response_model=BookModel)
def checkout_book(id: Optional[str] = Query(default=None), library: Library = Depends(get_library)):
    return _to_model(library.checkout_book(id))


@app.patch("/return", response_model=BookModel)
def return_book(id: Optional[str] = Query(default=None), library: Library = Depends(get_library)):
    return _to_model(library.return_book(id))
